#!/usr/bin/env python3
"""
Script to create an admin user for Poppes Natural.
Run this script wherever the application database is reachable.
"""

from poppes import create_app
from poppes.errors import StoreError
from poppes.extensions import db
from poppes.repositories import get_store


def create_admin_user(email, password, name, promote=None):
    """
    Create an admin user, or promote an existing one.

    Args:
        email: Admin email address
        password: Admin password (will be hashed)
        name: Admin full name
        promote: Callable asked whether to promote an existing account
    """
    identity = get_store().identity
    user = identity.find_by_email(email)

    if user is not None:
        print(f"User with email {email} already exists (role: {user.role}).")
        if user.is_admin():
            return user
        if promote is None or promote():
            user.promote()
            db.session.commit()
            print(f"User {email} updated to admin role!")
        return user

    try:
        user = identity.register(email, password, name, role='admin')
    except StoreError as e:
        print(f"Error creating admin user: {e}")
        raise

    print("Admin user created successfully!")
    print(f"   Email: {email}")
    print(f"   Name: {name}")
    print("\nYou can now log in with these credentials at /login")
    return user


def main():
    print("=" * 60)
    print("Poppes Natural - Admin User Creation")
    print("=" * 60)
    print()

    # Get admin details from user input
    print("Enter admin user details:")
    email = input("Email: ").strip().lower()
    password = input("Password: ").strip()
    name = input("Full Name: ").strip()

    print()
    confirm = input(f"Create admin {email}? (yes/no): ").lower()
    if confirm != 'yes':
        print("Admin creation cancelled.")
        return

    app = create_app()
    with app.app_context():
        create_admin_user(
            email, password, name,
            promote=lambda: input("Update this user to admin role? (yes/no): ").lower() == 'yes'
        )


if __name__ == '__main__':
    main()
