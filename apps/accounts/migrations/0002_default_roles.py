# Seeds the administrator and member roles

from django.db import migrations


DEFAULT_ROLES = [
    (1, 'Administrator'),
    (2, 'Member'),
]


def create_default_roles(apps, schema_editor):
    Role = apps.get_model('accounts', 'Role')
    for role_id, name in DEFAULT_ROLES:
        Role.objects.get_or_create(id=role_id, defaults={'name': name})


def remove_default_roles(apps, schema_editor):
    Role = apps.get_model('accounts', 'Role')
    Role.objects.filter(id__in=[role_id for role_id, _ in DEFAULT_ROLES]).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(create_default_roles, remove_default_roles),
    ]
