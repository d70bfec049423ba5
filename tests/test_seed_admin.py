"""Tests for the admin seeding script."""

from models import db
from models.user import User
from scripts.seed_admin import seed_admin


def test_seed_admin_creates_then_updates(app):
    with app.app_context():
        admin, action = seed_admin("root@example.com", "RootPass123")
        assert action == "created"
        assert admin.role == "admin"
        assert admin.check_password("RootPass123")

        admin.role = "contractor"
        db.session.commit()

        again, action = seed_admin("root@example.com", "NewPass456")
        assert action == "updated"
        assert again.id == admin.id
        assert again.role == "admin"
        assert again.check_password("NewPass456")
        assert User.query.count() == 1
