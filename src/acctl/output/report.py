"""Account report rows for ``acctl list``.

Pure functions of :class:`UserRecord`; the Rich table is built from these
rows in :mod:`acctl.output.renderers`.
"""

from __future__ import annotations

from collections.abc import Iterable

from acctl.domain.models import UserRecord

REPORT_COLUMNS: tuple[str, ...] = ("ID", "Username", "Profiles", "Roles", "Status", "State")


def derive_state(record: UserRecord) -> str:
    """``Enabled``/``Disabled`` plus ``, Verified`` or ``, Unverified``.

    Verified means a ``local`` profile exists and its metadata carries a
    ``confirmed_at`` timestamp.
    """
    state = "Disabled" if record.disabled else "Enabled"
    local = record.local_profile
    if local is not None and local.metadata.get("confirmed_at"):
        return f"{state}, Verified"
    return f"{state}, Unverified"


def build_row(record: UserRecord) -> dict[str, str]:
    return {
        "id": record.id,
        "username": record.username or "",
        "profiles": ", ".join(profile.provider for profile in record.profiles),
        "roles": ", ".join(sorted(role.value for role in record.roles)),
        "status": record.status.value,
        "state": derive_state(record),
    }


def build_rows(records: Iterable[UserRecord]) -> list[dict[str, str]]:
    """One row per record, in input order."""
    return [build_row(record) for record in records]
