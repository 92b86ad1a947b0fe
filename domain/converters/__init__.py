"""
Converters between storage rows and domain models.

Modules:
- json_arrays: tolerant parsing of JSON-array catalog columns
- db_converters: Supabase rows <-> domain models

Import from the modules directly.
"""
