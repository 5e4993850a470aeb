import sys
from user_settings import create_app
from user_settings.extensions import db
from user_settings.models.user import User
from user_settings.utils.auth import create_token

app = create_app()

with app.app_context():
    db.create_all()

    email = sys.argv[1] if len(sys.argv) > 1 else 'user@example.com'
    user = User.query.filter_by(email=email).first()
    if not user:
        user = User(name='User Demo', email=email)
        db.session.add(user)
        db.session.commit()
        print(f'Created user {email}')
    else:
        print(f'User {email} already exists')

    print(f'Bearer token: {create_token(user.id)}')
