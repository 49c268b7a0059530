from io import StringIO

import pytest
from django.core.management import call_command

from core.management.commands.seed_industries import INDUSTRIES
from core.models import Industry

pytestmark = pytest.mark.django_db

EXPECTED = len(INDUSTRIES) + sum(len(children) for *_, children in INDUSTRIES)


def seed(*args):
    out = StringIO()
    call_command('seed_industries', *args, stdout=out)
    return out.getvalue()


def test_seed_creates_two_level_tree():
    output = seed()
    assert f'Industries seeded: {EXPECTED} created, 0 updated' in output
    assert Industry.objects.filter(parent__isnull=True).count() == len(INDUSTRIES)
    banking = Industry.objects.get(code='FIN-BNK')
    assert banking.parent.code == 'FIN'


def test_seed_is_idempotent():
    seed()
    output = seed()
    assert 'Industries seeded: 0 created, 0 updated' in output
    assert Industry.objects.count() == EXPECTED


def test_seed_restores_edited_rows():
    seed()
    Industry.objects.filter(code='FIN').update(name='Money')
    Industry.objects.filter(code='AGR-CRP').update(deleted_at='2024-01-01T00:00:00Z')
    output = seed()
    assert '0 created, 2 updated' in output
    assert Industry.objects.get(code='FIN').name == 'Financial Services'
    assert Industry.objects.get(code='AGR-CRP').deleted_at is None


def test_dry_run_writes_nothing():
    output = seed('--dry-run')
    assert '(dry run)' in output
    assert Industry.objects.count() == 0
