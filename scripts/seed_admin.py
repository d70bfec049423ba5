"""Seed an administrator user."""

import os

from app import create_app
from models import db
from models.profile import Profile
from models.user import User

ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "AdminPass123")


def seed_admin(email: str = ADMIN_EMAIL, password: str = ADMIN_PASSWORD) -> tuple[User, str]:
    """Create or update the admin account; return it with the action taken."""

    admin = User.query.filter_by(email=email).first()
    if admin is None:
        admin = User(email=email, role="admin", is_verified=True)
        admin.profile = Profile(first_name="Platform", last_name="Admin", preferences={})
        db.session.add(admin)
        action = "created"
    else:
        admin.role = "admin"
        admin.is_verified = True
        action = "updated"
    admin.set_password(password)
    db.session.commit()
    return admin, action


def main() -> None:
    app = create_app()
    with app.app_context():
        admin, action = seed_admin()
        print(f"Admin user {action}: {admin.email}")


if __name__ == "__main__":
    main()
