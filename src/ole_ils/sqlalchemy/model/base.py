from sqlalchemy.orm import declarative_base

# Placeholder schema the OLE tables are declared in. Engines map it to
# the configured database name through schema_translate_map.
OLE_SCHEMA = "ole"

Base = declarative_base()
