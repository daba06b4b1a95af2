from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase
from django.contrib.auth.models import User


class LoginTests(APITestCase):
    """
    Test suite for the user login functionality.

    This class contains tests that cover various scenarios for the login API
    endpoint, including successful authentication, failed attempts with bad
    credentials, blocked accounts and requests with missing data.
    """

    def setUp(self):
        """
        Set up the test environment before each test method is run.

        This method creates a standard user in the test database, which will be
        used to test the login process. The email doubles as the username.
        """
        self.user = User.objects.create_user(
            username='ayesha@example.com',
            email='ayesha@example.com',
            password='examplePassword',
            first_name='Ayesha Khan'
        )
        self.url = reverse('login')

    def test_login_success(self):
        """
        Ensure a registered user can successfully log in with correct credentials.

        The response must have a 200 OK status code and contain an authentication
        token and the user's details inside the response envelope.
        """
        data = {
            "email": "ayesha@example.com",
            "password": "examplePassword"
        }
        response = self.client.post(self.url, data, format='json')

        # Assert that the request was successful
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['success'])

        # Assert that the response contains the expected keys and values
        payload = response.data['data']
        self.assertEqual(payload['token'], Token.objects.get(user=self.user).key)
        self.assertEqual(payload['id'], self.user.id)
        self.assertEqual(payload['name'], 'Ayesha Khan')
        self.assertEqual(payload['email'], 'ayesha@example.com')
        self.assertEqual(payload['role'], 'user')

    def test_login_email_is_case_insensitive(self):
        data = {"email": "Ayesha@Example.com", "password": "examplePassword"}
        response = self.client.post(self.url, data, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_login_bad_credentials(self):
        """
        Ensure a login attempt with a wrong password or an unknown email fails
        with 401 and the same message in both cases.
        """
        for data in ({"email": "ayesha@example.com", "password": "wrongPassword"},
                     {"email": "nobody@example.com", "password": "examplePassword"}):
            response = self.client.post(self.url, data, format='json')

            # Assert that the request was rejected
            self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
            self.assertFalse(response.data['success'])
            self.assertEqual(response.data['message'], 'Invalid email or password')

        self.assertFalse(Token.objects.exists())

    def test_login_blocked_user(self):
        """
        Ensure a blocked user cannot log in, even with the correct password, and
        is told why.
        """
        self.user.profile.block('Posting spam')

        data = {"email": "ayesha@example.com", "password": "examplePassword"}
        response = self.client.post(self.url, data, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['message'], 'Your account has been blocked: Posting spam')
        self.assertFalse(Token.objects.exists())

    def test_login_missing_fields(self):
        """
        Ensure a login attempt with missing credentials fails with validation errors.

        Both fields are reported under `errors` in the response envelope.
        """
        data = {
            "email": "",
            "password": ""
        }
        response = self.client.post(self.url, data, format='json')

        # Assert that the request was a bad request
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        # Assert that errors for both fields are present
        self.assertIn('email', response.data['errors'])
        self.assertIn('password', response.data['errors'])


class CurrentUserTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username='fatima@example.com',
            email='fatima@example.com',
            password='examplePassword',
            first_name='Fatima Ahmed'
        )

    def test_me_returns_current_user(self):
        token = Token.objects.create(user=self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f'Token {token.key}')

        response = self.client.get(reverse('current-user'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data'], {
            'id': self.user.id,
            'name': 'Fatima Ahmed',
            'email': 'fatima@example.com',
            'role': 'user',
            'is_blocked': False,
            'blocked_reason': '',
        })

    def test_me_requires_authentication(self):
        response = self.client.get(reverse('current-user'))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data['success'])
