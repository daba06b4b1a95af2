from django.apps import AppConfig


class StylesAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'styles_app'
    verbose_name = 'Hijab styles'
