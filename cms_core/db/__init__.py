"""Database Declarations: declarative base shared by models and migrations."""
