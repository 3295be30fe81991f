from extensions import db
from models import ALLOWED_ROLES, User
from sqlalchemy import or_
from werkzeug.security import generate_password_hash


def create_user(username, email, password, role):
    """Create an account directly in the database; the only way to get an admin besides seed data.

    Must run inside an application context.
    """
    # username and email are unique
    existing_user = User.query.filter(or_(User.username == username, User.email == email)).first()
    if existing_user:
        print(f"User '{existing_user.username}' <{existing_user.email}> already exists with role '{existing_user.role}'.")
        return None

    user = User(
        username=username,
        email=email,
        password=generate_password_hash(password),
        role=role
    )
    db.session.add(user)
    db.session.commit()
    print(f"Created user: {username} <{email}> (role: {role})")
    return user

if __name__ == '__main__':
    import argparse

    from app import create_app

    parser = argparse.ArgumentParser(description='Create a new user.')
    parser.add_argument('username', help='Username')
    parser.add_argument('email', help='E-mail address')
    parser.add_argument('password', help='Password')
    parser.add_argument('role', choices=ALLOWED_ROLES, help='User role')

    args = parser.parse_args()
    with create_app().app_context():
        create_user(args.username, args.email, args.password, args.role)
