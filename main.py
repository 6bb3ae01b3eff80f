"""
Main application entry point for the Contacts API.

This module initializes the FastAPI application, configures logging and
CORS, installs the JSON error envelope handlers, and includes routers
for users, contacts and addresses.

Modules:
- FastAPI: Web framework
- CORSMiddleware: Middleware for handling CORS
- app.database: Database engine
- app.models: SQLAlchemy models
- app.users: Users router
- app.contacts: Contacts router
- app.addresses: Addresses router
- app.errors: Error envelope handlers
- app.core: Application settings
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.database import engine
from app import models, contacts, addresses, users
from app.core import configure_logging, get_settings
from app.errors import register_exception_handlers

settings = get_settings()
configure_logging(settings.LOG_LEVEL)

# Create tables (for development only)
models.Base.metadata.create_all(bind=engine)

# Initialize FastAPI application
app = FastAPI(title="Contacts API")

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers for application areas
app.include_router(users.router)
app.include_router(contacts.router)
app.include_router(addresses.router)


@app.get("/")
def root():
    """
    Root endpoint for the API.

    Returns a simple JSON message directing users to the Swagger UI.

    Returns:
        dict: JSON message with information about the API
    """
    return {"msg": "Contacts API. Visit /docs for Swagger UI"}
