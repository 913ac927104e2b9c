"""
Create any missing tables in the configured database.
Usage: python -m jobboard.scripts.ensure_tables
"""
from jobboard.database import ensure_tables_exist


def main():
    ensure_tables_exist()
    print("DB table check complete: created only missing tables.")


if __name__ == "__main__":
    main()
