import os

from gymcloud import create_app
from gymcloud.extensions import db
from gymcloud.models import User
from gymcloud.services.accounts import create_user

app = create_app()

with app.app_context():
    db.create_all()

    # first administrator
    email = os.getenv("ADMIN_EMAIL", "admin@gymcloud.local")
    password = os.getenv("ADMIN_PASSWORD", "admin1234")
    name = os.getenv("ADMIN_NAME", "Super Admin")

    # skip if the email is already taken
    existing_user = User.query.filter_by(email=email.strip().lower()).first()
    if existing_user:
        print(f"User with email '{email}' already exists.")
    else:
        user = create_user(None, {
            "email": email,
            "name": name,
            "role": "ADMIN",
            "password": password,
        })

        print(f"{user.role.capitalize()} created successfully!")
        print(f"Email: {user.email}")
        print(f"Password: {password}")
