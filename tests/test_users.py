"""
Registration, login, the authentication gate and the user directory.
"""
from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from rest_framework_simplejwt.tokens import AccessToken

from apps.groups.models import GroupMember
from apps.groups.services import create_group
from apps.users import services
from apps.users.tokens import UserAccessToken
from common.authentication import Caller
from common.exceptions import AuthError, ConflictError, ValidationError

User = get_user_model()

pytestmark = pytest.mark.django_db


class TestRegister:

    def test_creates_user_with_hashed_password(self, api_client):
        response = api_client.post('/api/v1/register', {
            'username': 'dana',
            'password': 'pa55word',
            'email': 'dana@example.com',
        })

        assert response.status_code == 200
        assert response.data['success'] is True
        assert response.data['data']['username'] == 'dana'
        assert 'password' not in response.data['data']
        user = User.objects.get(username='dana')
        assert user.password != 'pa55word'
        assert user.check_password('pa55word')
        assert user.is_admin is False

    def test_duplicate_username_conflicts(self, api_client, alice):
        response = api_client.post('/api/v1/register', {
            'username': 'alice',
            'password': 'another',
            'email': 'other@example.com',
        })

        assert response.status_code == 409
        assert response.data['error']['code'] == 'conflict'
        assert User.objects.filter(username='alice').count() == 1

    def test_missing_field_is_rejected(self, api_client):
        response = api_client.post('/api/v1/register', {
            'username': 'dana',
            'password': 'pa55word',
        })

        assert response.status_code == 400
        assert response.data['error']['code'] == 'validation_error'
        assert 'email' in response.data['error']['details']

    def test_unknown_field_is_rejected(self, api_client):
        response = api_client.post('/api/v1/register', {
            'username': 'dana',
            'password': 'pa55word',
            'email': 'dana@example.com',
            'is_admin': True,
        })

        assert response.status_code == 400
        assert not User.objects.filter(username='dana').exists()

    def test_service_rejects_empty_values(self):
        with pytest.raises(ValidationError):
            services.register('', 'secret', 'x@example.com')

    def test_service_rejects_taken_username(self, alice):
        with pytest.raises(ConflictError):
            services.register('alice', 'secret', 'x@example.com')


class TestLogin:

    def test_token_claims_match_user(self, api_client, alice):
        response = api_client.post('/api/v1/login', {
            'username': 'alice',
            'password': 'correct-horse',
        })

        assert response.status_code == 200
        assert response.data['success'] is True
        assert response.data['user'] == {
            'id': alice.id,
            'username': 'alice',
            'email': 'alice@example.com',
            'is_admin': False,
        }
        claims = AccessToken(response.data['token'])
        assert claims['id'] == alice.id
        assert claims['username'] == 'alice'
        assert claims['email'] == 'alice@example.com'
        assert claims['is_admin'] is False

    def test_admin_flag_is_carried_in_token(self, make_user):
        make_user('root', is_admin=True)

        token, user = services.login('root', 'correct-horse')

        assert user.is_admin is True
        assert AccessToken(token)['is_admin'] is True

    def test_unknown_user_and_wrong_password_look_the_same(self, api_client, alice):
        unknown = api_client.post('/api/v1/login', {
            'username': 'nobody',
            'password': 'correct-horse',
        })
        wrong = api_client.post('/api/v1/login', {
            'username': 'alice',
            'password': 'wrong',
        })

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.data == wrong.data
        assert wrong.data['error']['message'] == services.INVALID_CREDENTIALS

    def test_service_raises_auth_error(self, alice):
        with pytest.raises(AuthError):
            services.login('alice', 'wrong')

    def test_missing_password_is_rejected(self, api_client):
        response = api_client.post('/api/v1/login', {'username': 'alice'})

        assert response.status_code == 400


class TestAuthenticationGate:

    def test_missing_token_is_unauthorized(self, api_client):
        response = api_client.get('/api/v1/groups')

        assert response.status_code == 401
        assert response.data['success'] is False
        assert response.data['error']['code'] == 'authentication_failed'

    def test_garbage_token_is_forbidden(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')

        response = api_client.get('/api/v1/groups')

        assert response.status_code == 403
        assert response.data['error']['code'] == 'token_invalid'

    def test_expired_token_is_forbidden(self, api_client, alice):
        token = UserAccessToken.for_user(alice)
        token.set_exp(lifetime=-timedelta(minutes=1))
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

        response = api_client.get('/api/v1/meetings')

        assert response.status_code == 403
        assert response.data['error']['code'] == 'token_invalid'

    def test_tampered_token_is_forbidden(self, api_client, alice):
        token = str(UserAccessToken.for_user(alice))
        header, payload, signature = token.split('.')
        tampered = '.'.join([header, payload, signature[::-1]])
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {tampered}')

        response = api_client.get('/api/v1/meetings')

        assert response.status_code == 403

    def test_caller_id_is_numeric_even_for_string_claims(self, alice):
        token = AccessToken()
        token['id'] = str(alice.id)
        token['username'] = 'alice'

        assert Caller(token).id == alice.id

    def test_member_can_leave_with_login_token(self, api_client, alice, bob, caller_for):
        group = create_group(caller_for(alice), 'Walkers')
        GroupMember.objects.create(group=group, user=bob)
        token = api_client.post('/api/v1/login', {
            'username': 'bob',
            'password': 'correct-horse',
        }).data['token']
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

        response = api_client.delete(f'/api/v1/groups/{group.id}/members/{bob.id}')

        assert response.status_code == 200
        assert not GroupMember.objects.filter(group=group, user=bob).exists()

    def test_valid_token_passes(self, client_for, alice):
        response = client_for(alice).get('/api/v1/groups')

        assert response.status_code == 200
        assert response.data == {'success': True, 'data': []}

    def test_public_routes_ignore_bad_tokens(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')

        assert api_client.get('/api/v1/health').status_code == 200
        response = api_client.post('/api/v1/register', {
            'username': 'erin',
            'password': 'pa55word',
            'email': 'erin@example.com',
        })
        assert response.status_code == 200


class TestUserDirectory:

    @pytest.fixture
    def many_users(self):
        User.objects.bulk_create(
            User(username=f'member{n:03d}', email=f'member{n:03d}@example.com', password='!')
            for n in range(250)
        )
        return User.objects.order_by('username').first()

    def test_last_page_is_partial(self, client_for, many_users):
        response = client_for(many_users).get('/api/v1/users', {'page': 3, 'limit': 100})

        assert response.status_code == 200
        assert len(response.data['data']) == 50
        assert response.data['pagination'] == {
            'total': 250,
            'page': 3,
            'limit': 100,
            'pages': 3,
        }
        assert set(response.data['data'][0]) == {'id', 'username'}

    def test_defaults_to_first_hundred(self, many_users):
        rows, pagination = services.list_users()

        assert len(rows) == 100
        assert rows[0]['username'] == 'member000'
        assert pagination['page'] == 1
        assert pagination['limit'] == 100

    def test_rejects_non_positive_page(self, client_for, alice):
        response = client_for(alice).get('/api/v1/users', {'page': 0})

        assert response.status_code == 400

    def test_search_excludes_caller(self, client_for, make_user):
        alice = make_user('alice')
        make_user('alicia')
        make_user('bob', email='bob@alibaba.example')
        make_user('carol')

        response = client_for(alice).get('/api/v1/users/search', {'query': 'ali'})

        assert response.status_code == 200
        assert [row['username'] for row in response.data['data']] == ['alicia', 'bob']

    def test_search_caps_results(self, caller_for, make_user):
        caller = caller_for(make_user('searcher'))
        for n in range(25):
            make_user(f'match{n:02d}')

        assert len(services.search_users(caller, 'match')) == 20

    def test_query_whitespace_counts_towards_length(self, client_for, make_user):
        caller = make_user('searcher')
        make_user('gail', email='gail@mail.example')

        response = client_for(caller).get('/api/v1/users/search', {'query': 'il@'})
        padded = client_for(caller).get('/api/v1/users/search', {'query': 'zz '})

        assert [row['username'] for row in response.data['data']] == ['gail']
        assert padded.status_code == 200
        assert padded.data['data'] == []

    def test_short_query_is_rejected(self, client_for, alice):
        response = client_for(alice).get('/api/v1/users/search', {'query': 'al'})

        assert response.status_code == 400
        assert response.data['error']['code'] == 'validation_error'

    def test_admin_listing_requires_admin_flag(self, client_for, alice):
        response = client_for(alice).get('/api/v1/users/all')

        assert response.status_code == 403
        assert response.data['error']['code'] == 'permission_denied'

    def test_admin_listing_returns_everyone(self, client_for, make_user, alice, bob):
        root = make_user('root', is_admin=True)

        response = client_for(root).get('/api/v1/users/all')

        assert response.status_code == 200
        assert {row['username'] for row in response.data['data']} == {'alice', 'bob', 'root'}
        assert all('password' not in row for row in response.data['data'])
