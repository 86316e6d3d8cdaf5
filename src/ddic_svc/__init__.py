"""
DDIC Service - Three-Layer Data Dictionary

A metadata catalog modelled on the ANSI/SPARC schema architecture:
- Internal schema: domains and value ranges (technical types)
- Conceptual schema: data elements, tables and structures
- External schema: views, search helps and lock objects

On top of the catalog it provides consistency validation, where-used
(impact) analysis and dialect-specific SQL DDL generation.
"""

__version__ = "0.1.0"
