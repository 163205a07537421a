from django.apps import AppConfig


class MoCatalogAppConfig(AppConfig):
    name = "mocatalog"

    def ready(self):
        from django.core.signals import setting_changed
        from mocatalog.trans import invalidate_on_setting_change
        setting_changed.connect(invalidate_on_setting_change, dispatch_uid="mocatalog.invalidate_on_setting_change")
