from decimal import Decimal
from io import StringIO
from unittest.mock import patch

from django.contrib.auth.models import User
from django.core.management import call_command
from django.test import TestCase

from reviews_app.models import Review
from ..models import HijabStyle
from ..storage import ImageStorage, ImageStorageError, StoredImage

STORED = StoredImage(public_id='hijab-styles/seed.jpg', url='/media/hijab-styles/seed.jpg')


@patch.object(ImageStorage, 'destroy')
@patch.object(ImageStorage, 'upload', return_value=STORED)
class SeedStylesCommandTests(TestCase):
    """Tests for the `seed_styles` management command; the image storage is mocked."""

    def seed(self, *args):
        out, err = StringIO(), StringIO()
        call_command('seed_styles', *args, stdout=out, stderr=err)
        return out.getvalue(), err.getvalue()

    def test_seed_creates_demo_data(self, mock_upload, mock_destroy):
        out, _ = self.seed()

        self.assertIn('Data imported', out)
        self.assertEqual(User.objects.count(), 3)
        self.assertEqual(HijabStyle.objects.count(), 5)
        self.assertEqual(Review.objects.count(), 5)
        self.assertEqual(mock_upload.call_count, 5)

        admin = User.objects.get(email='admin@example.com')
        self.assertTrue(admin.profile.is_admin)
        self.assertTrue(admin.check_password('Password123!'))

        turkish = HijabStyle.objects.get(name='Turkish Hijab Style')
        self.assertEqual(turkish.image_public_id, STORED.public_id)
        self.assertEqual(turkish.review_count, 1)
        self.assertEqual(turkish.average_rating, Decimal('5.0'))

    def test_seed_twice_does_not_duplicate_users(self, mock_upload, mock_destroy):
        self.seed()
        out, _ = self.seed()

        self.assertIn('already exists, skipping', out)
        self.assertEqual(User.objects.count(), 3)

    def test_force_replaces_existing_data(self, mock_upload, mock_destroy):
        self.seed()
        self.seed('--force')

        self.assertEqual(HijabStyle.objects.count(), 5)
        self.assertEqual(Review.objects.count(), 5)

    def test_delete_keeps_superusers(self, mock_upload, mock_destroy):
        User.objects.create_superuser(username='root', email='root@example.com', password='x')
        self.seed()

        out, _ = self.seed('--delete')

        self.assertIn('Data destroyed', out)
        self.assertEqual(HijabStyle.objects.count(), 0)
        self.assertEqual(Review.objects.count(), 0)
        self.assertEqual(list(User.objects.values_list('username', flat=True)), ['root'])

    def test_failed_upload_falls_back_to_source_url(self, mock_upload, mock_destroy):
        mock_upload.side_effect = ImageStorageError('unreachable')

        _, err = self.seed()

        self.assertIn('Error uploading image', err)
        style = HijabStyle.objects.get(name='Emirati Hijab Style')
        self.assertEqual(style.image_public_id, '')
        self.assertTrue(style.image_url.startswith('https://'))

    def test_delete_removes_stored_images(self, mock_upload, mock_destroy):
        self.seed()
        HijabStyle.objects.filter(name='Wedding Hijab Style').update(image_public_id='')

        self.seed('--delete')

        self.assertEqual(mock_destroy.call_count, 4)
        mock_destroy.assert_called_with(STORED.public_id)

    def test_force_removes_previous_images(self, mock_upload, mock_destroy):
        self.seed()
        self.seed('--force')

        self.assertEqual(mock_destroy.call_count, 5)

    def test_image_deletion_failure_is_reported(self, mock_upload, mock_destroy):
        self.seed()
        mock_destroy.side_effect = ImageStorageError('backend down')

        out, err = self.seed('--delete')

        self.assertIn('Error deleting image', err)
        self.assertIn('Data destroyed', out)
        self.assertEqual(HijabStyle.objects.count(), 0)
