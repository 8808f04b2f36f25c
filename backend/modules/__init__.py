"""
Feature modules for the Copywise backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- service.py (or a named implementation module): Business logic
- exceptions.py: Module-specific exceptions

Modules communicate through interfaces, not concrete implementations.
"""
