from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model

User = get_user_model()

class Command(BaseCommand):
    help = 'Create a marketplace user (seller, boost manager or admin)'

    def add_arguments(self, parser):
        parser.add_argument('--email', type=str, required=True)
        parser.add_argument('--password', type=str, required=True)
        parser.add_argument('--username', type=str, required=True)
        parser.add_argument('--role', type=str, default='user', choices=['user', 'manager', 'admin'])
        parser.add_argument('--account-type', type=str, default='person', choices=['person', 'shop'])
        parser.add_argument('--shop-name', type=str, default='')
        parser.add_argument('--city', type=str, default='')
        parser.add_argument('--can-manage-boosts', action='store_true')

    def handle(self, *args, **options):
        email = options['email']

        if User.objects.filter(email=email).exists():
            self.stdout.write(
                self.style.ERROR(f'User with email {email} already exists')
            )
            return

        user = User.objects.create_user(
            username=options['username'],
            email=email,
            password=options['password'],
            role=options['role'],
            account_type=options['account_type'],
            shop_name=options['shop_name'],
            city=options['city'],
            can_manage_boosts=options['can_manage_boosts'],
            is_staff=options['role'] == 'admin',
        )

        self.stdout.write(
            self.style.SUCCESS(
                f'Successfully created {user.role} {email} (boost manager: {user.is_boost_manager})'
            )
        )
