"""
FastAPI routers grouped by domain.

Each module exposes an APIRouter that the app factory includes. Routers only
translate HTTP to store/codec calls; the rules live in casebook.services.
"""
