"""
dbdumper - Dump and load PostgreSQL databases with pg_dump and psql.

A small CLI that resolves connection settings from arguments, a config file
or the environment, and hands them to the PostgreSQL client programs.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
