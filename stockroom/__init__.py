"""
Stockroom

Account signup, login and profile provisioning for the Stockroom inventory
manager, backed by a hosted Supabase project.
"""

__version__ = "1.0.0"
