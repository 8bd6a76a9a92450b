import sys
from datetime import datetime, timezone
from urllib.parse import urlparse

import psycopg2

from app.core.config import settings
from app.core.enums import UserRole
from app.core.security import hash_password
from app.services.numbering import new_user_id


def create_admin_user(username: str, password: str, email: str) -> bool:
    try:
        db_url = urlparse(settings.DATABASE_URL.replace("postgresql+asyncpg://", "postgresql://"))

        conn = psycopg2.connect(
            host=db_url.hostname or "localhost",
            port=db_url.port or 5432,
            user=db_url.username or "postgres",
            password=db_url.password or "postgres",
            database=db_url.path.lstrip("/") or "postgres"
        )

        cursor = conn.cursor()

        cursor.execute("SELECT id FROM users WHERE username = %s OR email = %s", (username, email))
        if cursor.fetchone():
            print(f"Error: User '{username}' or email '{email}' already exists")
            cursor.close()
            conn.close()
            return False

        now = datetime.now(timezone.utc)
        user_id = new_user_id()
        cursor.execute(
            "INSERT INTO users (id, username, password_hash, email, first_name, last_name, role, created_at, updated_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (user_id, username, hash_password(password), email, "System", "Administrator", UserRole.ADMIN.value, now, now)
        )
        conn.commit()

        print(f"Admin user '{username}' created successfully")
        print(f"User ID: {user_id}")
        print(f"Role: {UserRole.ADMIN.value}")

        cursor.close()
        conn.close()
        return True

    except psycopg2.Error as e:
        print(f"Error creating admin user: {str(e)}")
        return False


def main():
    if len(sys.argv) < 4:
        print("Usage: python create_admin.py <username> <password> <email>")
        sys.exit(1)

    username, password, email = sys.argv[1], sys.argv[2], sys.argv[3]

    if not username or not password or not email:
        print("Error: username, password and email cannot be empty")
        sys.exit(1)

    success = create_admin_user(username, password, email)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
