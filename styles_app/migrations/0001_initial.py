from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='HijabStyle',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('description', models.TextField(max_length=500)),
                ('image_public_id', models.CharField(blank=True, default='', max_length=255)),
                ('image_url', models.CharField(blank=True, default='', max_length=500)),
                ('average_rating', models.DecimalField(decimal_places=1, default=0, max_digits=2)),
                ('review_count', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Hijab style',
                'verbose_name_plural': 'Hijab styles',
                'ordering': ['-created_at', '-id'],
            },
        ),
    ]
