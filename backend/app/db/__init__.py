"""
Database module for Engineer Guide

Contains seed data and database utilities.
"""
from app.db.seed_data import seed_all, seed_database

__all__ = ["seed_all", "seed_database"]
