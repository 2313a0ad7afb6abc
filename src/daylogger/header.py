"""
File header block: app identity, device identity and the user profile.

The header is written once, when a day's file is first created:

    Log Created: 2024-01-01
    App Name: Notes
    App Version 2.1.0 [311]
    App Bundle Identifier: com.example.notes
    OS: Linux (6.1.0)
    Device: x86_64
    ------------------ User Detail Start ----------------------------------
    ID: 42
    Name: Ada
    Phone: 555-0100
    Extra: {'plan': 'pro'}
    ------------------ User Detail End ----------------------------------

"""

import platform
import threading
from dataclasses import dataclass, field

NOT_AVAILABLE = "Not available"
UNKNOWN_APP_VERSION = "Unknown App Version"
UNKNOWN_BUNDLE_VERSION = "Unknown Bundle Version"

USER_DETAIL_START = "------------------ User Detail Start ----------------------------------"
USER_DETAIL_END = "------------------ User Detail End ----------------------------------"


@dataclass(frozen=True)
class HostMetadata:
    """App and device identity. Missing values fall back to placeholders."""

    app_name: str = NOT_AVAILABLE
    app_version: str = UNKNOWN_APP_VERSION
    build_number: str = UNKNOWN_BUNDLE_VERSION
    bundle_id: str = NOT_AVAILABLE
    os_name: str = NOT_AVAILABLE
    os_version: str = NOT_AVAILABLE
    device_model: str = NOT_AVAILABLE

    @classmethod
    def from_mapping(cls, values: dict) -> "HostMetadata":
        """Build from a loose key/value bundle, ignoring empty or unknown keys."""
        known = {k: str(v) for k, v in values.items() if k in cls.__dataclass_fields__ and v}
        return cls(**known)

    @classmethod
    def from_host(cls, settings=None) -> "HostMetadata":
        """Read OS and device from `platform`, app identity from settings."""
        values = {
            "os_name": platform.system(),
            "os_version": platform.release(),
            "device_model": platform.machine(),
        }
        if settings is not None:
            values.update(
                app_name=settings.app_name,
                app_version=settings.app_version,
                build_number=settings.build_number,
                bundle_id=settings.bundle_id,
            )
        return cls.from_mapping(values)


@dataclass(frozen=True)
class ProfileSnapshot:
    user_id: str = ""
    name: str = ""
    phone: str = ""
    extra: dict = field(default_factory=dict)


class UserProfile:
    """The current user, set once at startup and read when stamping headers.

    One instance is owned by the logger and passed to whatever needs it.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._snapshot = ProfileSnapshot()

    def set(self, user_id: str = "", name: str = "", phone: str = "", extra: dict = None) -> None:
        with self._lock:
            self._snapshot = ProfileSnapshot(user_id, name, phone, dict(extra or {}))

    def snapshot(self) -> ProfileSnapshot:
        with self._lock:
            return self._snapshot


def build_header(date: str, metadata: HostMetadata, profile: ProfileSnapshot) -> str:
    """Header block for a new daily file, ending with a blank line."""
    lines = [
        f"Log Created: {date}",
        f"App Name: {metadata.app_name}",
        f"App Version {metadata.app_version} [{metadata.build_number}]",
        f"App Bundle Identifier: {metadata.bundle_id}",
        f"OS: {metadata.os_name} ({metadata.os_version})",
        f"Device: {metadata.device_model}",
        USER_DETAIL_START,
        f"ID: {profile.user_id}",
        f"Name: {profile.name}",
        f"Phone: {profile.phone}",
        f"Extra: {profile.extra}",
        USER_DETAIL_END,
    ]
    return "\n".join(lines) + "\n\n"
