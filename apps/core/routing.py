"""URL fragments shared by the app routers."""

# Canonical 8-4-4-4-12 form; anything else never reaches the ORM
UUID_PATTERN = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'
