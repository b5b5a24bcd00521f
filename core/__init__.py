# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the domain logic behind the API:
# - models/: Pydantic schemas for request validation
# - services/: One service class per entity, talking to Supabase
#
# Services raise app.exceptions errors and return plain dicts; routers
# only validate input, resolve the business profile and shape responses.
# =============================================================================
