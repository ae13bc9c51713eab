from config.database import Database
from config.settings import get_settings


def init_db():
    database = Database.from_settings(get_settings())
    try:
        database.create_all()
    finally:
        database.dispose()


if __name__ == "__main__":
    init_db()
    print("Database initialized!")
