"""
Management command to create or promote a platform admin.

No API route sets ``is_admin``, so admins are provisioned here.

Usage:
    python manage.py create_admin alice alice@example.com --password s3cret
    python manage.py create_admin alice alice@example.com   # promote existing user
"""
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = 'Create a user with the platform admin flag, or promote an existing one.'

    def add_arguments(self, parser):
        parser.add_argument('username')
        parser.add_argument('email')
        parser.add_argument(
            '--password',
            help='Password for a new user, or a replacement for an existing one.',
        )

    def handle(self, *args, **options):
        User = get_user_model()

        username = options['username']
        email = options['email']
        password = options.get('password')

        user = User.objects.filter(username=username).first()

        if user is None:
            if not password:
                raise CommandError('--password is required when creating a new admin.')
            user = User(username=username, email=email, is_admin=True)
            user.set_password(password)
            user.save()
            self.stdout.write(
                self.style.SUCCESS(f'Successfully created admin user: {username}')
            )
            return

        user.is_admin = True
        if password:
            user.set_password(password)
        user.save()
        self.stdout.write(
            self.style.SUCCESS(f'User {username} already exists, promoted to admin.')
        )
