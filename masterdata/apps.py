from django.apps import AppConfig

class MasterdataConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'masterdata'
    verbose_name = 'Master Data'
