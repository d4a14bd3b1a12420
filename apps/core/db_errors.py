"""
Constraint violation translation.

Storage rejects writes that break a uniqueness or referential rule with an
IntegrityError. This module identifies the violated rule by its SQLSTATE
code and constraint name and maps it to a domain error through a declared
table. Anything not in the table is re-raised unchanged so the caller
treats it as an unexpected failure.
"""

import logging
import re
from contextlib import contextmanager
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Callable, Optional

from django.apps import apps
from django.db import IntegrityError, models

from .exceptions import ConflictError, DomainError, NotFoundError

logger = logging.getLogger(__name__)


# PostgreSQL SQLSTATE codes (class 23, integrity constraint violation)
NOT_NULL_VIOLATION = '23502'
FOREIGN_KEY_VIOLATION = '23503'
UNIQUE_VIOLATION = '23505'
CHECK_VIOLATION = '23514'


@dataclass(frozen=True)
class ConstraintViolation:
    """Vendor code and constraint name of a rejected write."""

    code: Optional[str]
    constraint: Optional[str]


# (code, constraint name pattern) -> error factory.
# Django generates foreign key constraint names, hence the glob patterns.
CONSTRAINT_ERRORS: dict[tuple[str, str], Callable[[], DomainError]] = {
    (UNIQUE_VIOLATION, 'groups_name_unique'):
        lambda: ConflictError('Group name already exists'),
    (UNIQUE_VIOLATION, 'group_memberships_group_user_unique'):
        lambda: ConflictError('User is already a member of this group'),
    (UNIQUE_VIOLATION, 'group_memberships_one_owner'):
        lambda: ConflictError('Group already has an owner'),
    (FOREIGN_KEY_VIOLATION, 'group_memberships_*_fk_*'):
        lambda: NotFoundError('Group or user no longer exists'),
    (FOREIGN_KEY_VIOLATION, 'groups_owner_id_*_fk_*'):
        lambda: NotFoundError('User no longer exists'),
}


_SQLITE_CODES = {
    'UNIQUE': UNIQUE_VIOLATION,
    'FOREIGN KEY': FOREIGN_KEY_VIOLATION,
    'NOT NULL': NOT_NULL_VIOLATION,
    'CHECK': CHECK_VIOLATION,
}

_SQLITE_MESSAGE = re.compile(
    r'^(?P<kind>UNIQUE|FOREIGN KEY|NOT NULL|CHECK) constraint failed(?::\s*(?P<detail>.+))?$'
)


def describe_violation(exc: IntegrityError) -> ConstraintViolation:
    """
    Extract the vendor code and constraint name from an IntegrityError.

    PostgreSQL drivers expose both directly on the wrapped driver error.
    SQLite only reports the affected columns, which are resolved back to
    the constraint declared on the Django model.
    """
    cause = exc.__cause__

    # psycopg 3 uses sqlstate, psycopg2 uses pgcode
    code = getattr(cause, 'sqlstate', None) or getattr(cause, 'pgcode', None)
    if code:
        diag = getattr(cause, 'diag', None)
        return ConstraintViolation(code=code, constraint=getattr(diag, 'constraint_name', None))

    match = _SQLITE_MESSAGE.match(str(cause if cause is not None else exc).strip())
    if not match:
        return ConstraintViolation(code=None, constraint=None)

    kind, detail = match.group('kind'), match.group('detail')
    code = _SQLITE_CODES[kind]

    if kind == 'UNIQUE' and detail:
        return ConstraintViolation(code=code, constraint=_resolve_unique_constraint(detail))
    if kind == 'CHECK':
        return ConstraintViolation(code=code, constraint=detail)
    return ConstraintViolation(code=code, constraint=None)


def _resolve_unique_constraint(detail: str) -> Optional[str]:
    """Map 'table.col, table.col' to the name of the matching unique constraint."""
    if detail.startswith("index '"):
        return detail[len("index '"):].rstrip("'")

    qualified = [part.strip() for part in detail.split(',')]
    table = qualified[0].split('.', 1)[0]
    columns = {part.split('.', 1)[1] for part in qualified if '.' in part}

    for model in apps.get_models():
        opts = model._meta
        if opts.db_table != table:
            continue

        for constraint in opts.constraints:
            if not isinstance(constraint, models.UniqueConstraint) or not constraint.fields:
                continue
            constraint_columns = {opts.get_field(name).column for name in constraint.fields}
            if constraint_columns == columns:
                return constraint.name

        # Field-level uniqueness, named the way PostgreSQL names it
        if len(columns) == 1:
            column = next(iter(columns))
            for field in opts.concrete_fields:
                if field.column != column:
                    continue
                if field.primary_key:
                    return f'{table}_pkey'
                if field.unique:
                    return f'{table}_{column}_key'
    return None


def lookup_error(violation: ConstraintViolation) -> Optional[DomainError]:
    """Return the domain error mapped to a violation, or None when unmapped."""
    if not violation.code or not violation.constraint:
        return None

    for (code, pattern), factory in CONSTRAINT_ERRORS.items():
        if code == violation.code and fnmatchcase(violation.constraint, pattern):
            return factory()
    return None


def translate_violation(exc: IntegrityError) -> Optional[DomainError]:
    """Translate an IntegrityError into a domain error, or None when unmapped."""
    return lookup_error(describe_violation(exc))


@contextmanager
def translate_constraint_violations():
    """
    Re-raise storage constraint violations as domain errors.

    Wrap it around ``transaction.atomic()`` so the transaction is rolled back
    before the error is translated:

        with translate_constraint_violations(), transaction.atomic():
            ...

    Unmapped violations propagate unchanged.
    """
    try:
        yield
    except IntegrityError as exc:
        error = translate_violation(exc)
        if error is None:
            violation = describe_violation(exc)
            logger.error(
                "Unmapped constraint violation (code=%s, constraint=%s)",
                violation.code,
                violation.constraint,
            )
            raise
        raise error from exc
