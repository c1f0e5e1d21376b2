"""
Profile Store Client
Inserts and looks up rows in the hosted profile table
"""

from supabase import AsyncClient, PostgrestAPIError
from typing import Dict, Any
import httpx
import logging

from stockroom.models.account import ProfileRecord
from stockroom.models.errors import StoreConflictError, StoreTransportError

logger = logging.getLogger(__name__)

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"


class ProfileStoreClient:
    """Adapter over the profile table; one row per provider account"""

    def __init__(self, client: AsyncClient, table: str = "profile"):
        self.client = client
        self.table = table

    async def is_username_available(self, username: str) -> bool:
        """
        Check whether no profile uses this username yet

        The answer is advisory: another signup may take the name before the
        insert happens.

        Raises:
            StoreTransportError: Lookup failed
        """
        try:
            response = await (
                self.client.table(self.table)
                .select("user_id")
                .eq("username", username)
                .limit(1)
                .execute()
            )
        except (PostgrestAPIError, httpx.HTTPError) as e:
            logger.error(f"Username lookup failed for {username}: {e}")
            raise StoreTransportError("Unable to check username availability") from e

        return not response.data

    async def create_profile(self, user_id: str, fields: Dict[str, Any]) -> ProfileRecord:
        """
        Insert the profile row for a newly created account

        Args:
            user_id: Provider-assigned user id
            fields: username, phone, role, full_name, business_name

        Returns:
            ProfileRecord: The inserted record

        Raises:
            StoreConflictError: user id or username already taken
            StoreTransportError: any other failure
        """
        record = ProfileRecord(
            user_id=user_id,
            username=fields['username'],
            role=fields['role'],
            full_name=fields['full_name'],
            business_name=fields['business_name'],
            phone=fields.get('phone')
        )

        try:
            await self.client.table(self.table).insert(record.to_row()).execute()
        except PostgrestAPIError as e:
            if str(e.code) in (UNIQUE_VIOLATION, "409"):
                logger.warning(f"Profile conflict for user {user_id}: {e.message}")
                raise StoreConflictError("Profile save failed: username or account already has a profile") from e
            logger.error(f"Profile insert failed for user {user_id}: {e.message}")
            raise StoreTransportError("Profile save failed") from e
        except httpx.HTTPError as e:
            logger.error(f"Profile insert transport error for user {user_id}: {e}")
            raise StoreTransportError("Profile save failed") from e

        logger.info(f"Profile created for user {user_id}")
        return record
