from django.contrib.auth.models import User
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from reviews_app.models import Review
from reviews_app.services import recompute_aggregate
from styles_app.models import HijabStyle
from styles_app.storage import ImageStorage, ImageStorageError, ImageUploadError
from user_auth_app.models import UserProfile


USERS = [
    {"name": "Ayesha Khan", "email": "ayesha@example.com", "password": "Password123!", "role": "user"},
    {"name": "Fatima Ahmed", "email": "fatima@example.com", "password": "Password123!", "role": "user"},
    {"name": "Admin User", "email": "admin@example.com", "password": "Password123!", "role": "admin"},
]

STYLES = [
    {
        "name": "Turkish Hijab Style",
        "description": "Elegant Turkish hijab style with a modern twist, perfect for formal occasions.",
        "image_url": "https://encrypted-tbn0.gstatic.com/images?q=tbn:ANd9GcSGFNL3ytWBoEEJ0PIbutKdcQk-gbxgky06kA&s",
    },
    {
        "name": "Casual Everyday Hijab",
        "description": "Simple and comfortable hijab style for daily wear with easy wrapping technique.",
        "image_url": "https://blackcamels.com.pk/cdn/shop/products/2-5_0e406f3d-a6c9-4575-b1f5-69bf92bedb50.jpg?v=1753963988",
    },
    {
        "name": "Emirati Hijab Style",
        "description": "Traditional Emirati hijab style with a luxurious feel and elegant draping.",
        "image_url": "https://blackcamels.com.pk/cdn/shop/products/19-4.jpg?v=1753963985",
    },
    {
        "name": "Modern Wrap Hijab",
        "description": "Contemporary hijab style with a unique wrap that stays in place all day.",
        "image_url": "https://blackcamels.com.pk/cdn/shop/products/16-4.jpg?v=1753963986",
    },
    {
        "name": "Wedding Hijab Style",
        "description": "Luxurious hijab style for weddings and special occasions with embellishments.",
        "image_url": "https://blackcamels.com.pk/cdn/shop/products/7-5_5ab2a2c6-99a2-48c2-8eba-3e0def70324e.jpg?v=1753963987",
    },
]

# (style index, user index, rating, comment)
REVIEWS = [
    (0, 0, 5, "Love this style! It's so elegant and comfortable at the same time."),
    (1, 1, 4, "Great for everyday wear. Would recommend to anyone looking for comfort."),
    (2, 2, 5, "Perfect for special occasions. Got so many compliments!"),
    (3, 0, 3, "Nice style but took some practice to get it right."),
    (4, 1, 5, "Absolutely stunning! My new favorite way to wear hijab."),
]


class Command(BaseCommand):
    help = "Seed demo users, hijab styles and reviews, or delete all of them with --delete."

    def add_arguments(self, parser):
        parser.add_argument("--import", action="store_true", dest="import_data",
                            help="Import the demo data (the default).")
        parser.add_argument("--delete", action="store_true", help="Delete all users, styles and reviews.")
        parser.add_argument("--force", action="store_true", help="Clear existing data before importing.")

    def handle(self, *args, **options):
        if options["delete"] and options["import_data"]:
            raise CommandError("Use either --import or --delete, not both.")

        storage = ImageStorage.from_settings()

        if options["delete"]:
            self.clear(storage)
            self.stdout.write(self.style.SUCCESS("Data destroyed successfully."))
            return

        if options["force"]:
            self.clear(storage)
            self.stdout.write("Existing data cleared.")

        users = self.create_users()
        styles = self.create_styles(storage)
        created = self.create_reviews(styles, users)

        self.stdout.write(self.style.SUCCESS(
            f"Data imported: {len(users)} users, {len(styles)} styles, {created} reviews."
        ))

    def clear(self, storage):
        """
        Deletes all reviews, styles and non-superuser accounts, then the styles' stored images.
        Images that cannot be deleted are reported and skipped.
        """
        public_ids = [
            public_id for public_id in HijabStyle.objects.values_list("image_public_id", flat=True)
            if public_id
        ]
        with transaction.atomic():
            Review.objects.all().delete()
            HijabStyle.objects.all().delete()
            User.objects.filter(is_superuser=False).delete()

        for public_id in public_ids:
            try:
                storage.destroy(public_id)
            except ImageStorageError as exc:
                self.stderr.write(f"Error deleting image {public_id}: {exc}")

    def create_users(self):
        """Creates the demo users, reusing accounts whose email already exists."""
        users = []
        for entry in USERS:
            user = User.objects.filter(email__iexact=entry["email"]).first()
            if user is not None:
                self.stdout.write(f"User {entry['email']} already exists, skipping...")
                users.append(user)
                continue

            user = User.objects.create_user(
                username=entry["email"],
                email=entry["email"],
                password=entry["password"],
                first_name=entry["name"],
            )
            UserProfile.objects.filter(user=user).update(role=entry["role"])
            self.stdout.write(f"Created user: {entry['email']}")
            users.append(user)
        return users

    def create_styles(self, storage):
        """
        Creates the demo styles, uploading each image from its URL.

        When an upload fails the style is still created and points at the original URL.
        """
        styles = []
        for entry in STYLES:
            try:
                stored = storage.upload(entry["image_url"])
                public_id, url = stored.public_id, stored.url
            except (ImageStorageError, ImageUploadError) as exc:
                self.stderr.write(f"Error uploading image for {entry['name']}: {exc}")
                public_id, url = "", entry["image_url"]

            styles.append(HijabStyle.objects.create(
                name=entry["name"],
                description=entry["description"],
                image_public_id=public_id,
                image_url=url,
            ))
        return styles

    def create_reviews(self, styles, users):
        created = 0
        for style_index, user_index, rating, comment in REVIEWS:
            style, user = styles[style_index], users[user_index]
            _, was_created = Review.objects.get_or_create(
                hijab_style=style,
                user=user,
                defaults={"rating": rating, "comment": comment},
            )
            created += int(was_created)
            recompute_aggregate(style.pk)
        return created
