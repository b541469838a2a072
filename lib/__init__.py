# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - database.py: SQLAlchemy engine, session factory and declarative base
# - blocks.py: Block document parsing and serialization
# - renderer.py: Read-only HTML rendering of block documents
# - network.py: Outbound URL guard (SSRF checks)
# - supabase_client.py: Supabase Storage wrapper for image uploads
# - utils.py: Shared helpers (slugs, de-duplication)
#
# Modules are imported directly (e.g. `from lib.blocks import parse_document`)
# so importing one doesn't drag in the others' dependencies.
# =============================================================================
