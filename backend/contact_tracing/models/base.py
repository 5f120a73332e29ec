# contact_tracing/models/base.py
from sqlalchemy.orm import declarative_base

# Base class for the ORM models to inherit from
Base = declarative_base()
