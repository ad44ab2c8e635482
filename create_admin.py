"""
Script to create the admin user
Run this script after running database migrations

Usage:
    python create_admin.py

Environment Variables (optional):
    ADMIN_PASSWORD - Admin password (min 6 characters)
    ADMIN_EMAIL - Admin email address
    ADMIN_NAME - Admin name
"""
import sys
import os
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from app.database import SessionLocal
from app.models.user import User, UserRole
from app.utils.security import get_password_hash
from app.config import settings


def create_admin():
    """Create the admin user"""
    db = SessionLocal()

    try:
        try:
            existing_admin = db.query(User).filter(User.username == settings.ADMIN_USERNAME).first()
        except OperationalError as e:
            # Table doesn't exist - need to run migrations
            if "no such table" in str(e).lower():
                print("[ERROR] Users table does not exist!")
                print("   Please run database migrations first:")
                print("   alembic upgrade head")
                return
            raise

        if existing_admin:
            print("[ERROR] Admin user already exists!")
            print(f"   Username: {existing_admin.username}")
            print("   Use the login endpoint to authenticate.")
            return

        print("=" * 50)
        print("Create Admin User")
        print("=" * 50)

        # Check environment variables first
        email = os.getenv("ADMIN_EMAIL", "").strip()
        password = os.getenv("ADMIN_PASSWORD", "").strip()
        name = os.getenv("ADMIN_NAME", "").strip()

        if not email:
            email = input("Enter admin email: ").strip()
            if not email:
                print("[ERROR] Email is required!")
                return

        if db.query(User).filter(User.email == email).first():
            print(f"[ERROR] A user with email {email} already exists!")
            return

        if not password:
            password = input("Enter admin password (min 6 characters): ").strip()
        if len(password) < 6:
            print("[ERROR] Password must be at least 6 characters!")
            return

        if not name:
            name = input("Enter admin name [Administrator]: ").strip() or "Administrator"

        admin = User(
            username=settings.ADMIN_USERNAME,
            password_hash=get_password_hash(password),
            name=name,
            email=email,
            address="Not provided",
            city="Not provided",
            postal_code="00000",
            role=UserRole.ADMIN
        )

        db.add(admin)
        db.commit()
        db.refresh(admin)

        print("\n" + "=" * 50)
        print("[SUCCESS] Admin user created successfully!")
        print("=" * 50)
        print(f"   Username: {admin.username}")
        print(f"   Email: {admin.email}")
        print(f"   ID: {admin.id}")
        print("\n[TIP] You can now login at: POST /api/v1/auth/login")
        print("=" * 50)

    except SQLAlchemyError as e:
        db.rollback()
        print(f"[ERROR] Error creating admin: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    create_admin()
