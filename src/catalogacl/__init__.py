"""catalogacl - access-control core for catalog principals, roles and grants."""

__version__ = "0.1.0"
