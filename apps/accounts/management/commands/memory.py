"""
Management command to read and edit runtime options.

Usage:
    python manage.py memory list
    python manage.py memory get site.name
    python manage.py memory set email.queue true
    python manage.py memory forget email.queue

Values passed to ``set`` are parsed as JSON when possible, so ``true``,
``2`` and ``"text"`` keep their types; anything else is stored as a string.
"""

import json

from django.core.management.base import BaseCommand, CommandError

from apps.accounts.memory import MemoryStore


class Command(BaseCommand):
    help = 'Read or edit runtime options (site.name, email.queue, ...)'

    def add_arguments(self, parser):
        parser.add_argument('action', choices=['list', 'get', 'set', 'forget'])
        parser.add_argument('key', nargs='?')
        parser.add_argument('value', nargs='?')

    def handle(self, *args, **options):
        action = options['action']
        key = options['key']
        memory = MemoryStore()

        if action == 'list':
            items = memory.all()
            if not items:
                self.stdout.write('No options stored.')
            for name, value in sorted(items.items()):
                self.stdout.write(f'{name} = {json.dumps(value)}')
            return

        if not key:
            raise CommandError(f'"{action}" requires a key')

        if action == 'get':
            if not memory.has(key):
                raise CommandError(f'Option "{key}" is not set')
            self.stdout.write(json.dumps(memory.get(key)))

        elif action == 'set':
            if options['value'] is None:
                raise CommandError('"set" requires a value')
            value = self.parse_value(options['value'])
            memory.put(key, value)
            self.stdout.write(self.style.SUCCESS(f'{key} = {json.dumps(value)}'))

        elif action == 'forget':
            memory.forget(key)
            self.stdout.write(self.style.SUCCESS(f'Forgot {key}'))

    def parse_value(self, raw):
        try:
            return json.loads(raw)
        except ValueError:
            return raw
