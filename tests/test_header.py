"""Tests for host metadata, the user profile and the header block."""

from unittest.mock import patch

from daylogger.config import Settings
from daylogger.header import (
    HostMetadata,
    ProfileSnapshot,
    UserProfile,
    build_header,
)


class TestHostMetadata:
    """Test metadata defaults and sources."""

    def test_placeholders(self):
        meta = HostMetadata()
        assert meta.app_version == "Unknown App Version"
        assert meta.build_number == "Unknown Bundle Version"
        assert meta.bundle_id == "Not available"

    def test_from_mapping_ignores_empty_and_unknown(self):
        meta = HostMetadata.from_mapping(
            {"app_name": "Notes", "app_version": "", "color": "blue"}
        )
        assert meta.app_name == "Notes"
        assert meta.app_version == "Unknown App Version"

    def test_from_host(self):
        config = Settings(app_name="Notes", app_version="2.1.0", bundle_id="com.example.notes")
        with patch("daylogger.header.platform.system", return_value="Linux"), \
                patch("daylogger.header.platform.release", return_value="6.1.0"), \
                patch("daylogger.header.platform.machine", return_value="x86_64"):
            meta = HostMetadata.from_host(config)

        assert meta.os_name == "Linux"
        assert meta.os_version == "6.1.0"
        assert meta.device_model == "x86_64"
        assert meta.app_name == "Notes"
        assert meta.build_number == "Unknown Bundle Version"


class TestUserProfile:
    """Test the profile store."""

    def test_starts_empty(self):
        assert UserProfile().snapshot() == ProfileSnapshot()

    def test_set_replaces_values(self):
        profile = UserProfile()
        profile.set("42", name="Ada", phone="555-0100", extra={"plan": "pro"})
        profile.set("43")
        snap = profile.snapshot()
        assert snap.user_id == "43"
        assert snap.name == ""
        assert snap.extra == {}

    def test_extra_is_copied(self):
        extra = {"plan": "pro"}
        profile = UserProfile()
        profile.set("42", extra=extra)
        extra["plan"] = "free"
        assert profile.snapshot().extra == {"plan": "pro"}


class TestBuildHeader:
    """Test the header block layout."""

    def test_full_header(self):
        meta = HostMetadata(
            app_name="Notes",
            app_version="2.1.0",
            build_number="311",
            bundle_id="com.example.notes",
            os_name="Linux",
            os_version="6.1.0",
            device_model="x86_64",
        )
        profile = ProfileSnapshot("42", "Ada", "555-0100", {"plan": "pro"})

        header = build_header("2024-01-01", meta, profile)

        assert header.split("\n") == [
            "Log Created: 2024-01-01",
            "App Name: Notes",
            "App Version 2.1.0 [311]",
            "App Bundle Identifier: com.example.notes",
            "OS: Linux (6.1.0)",
            "Device: x86_64",
            "------------------ User Detail Start ----------------------------------",
            "ID: 42",
            "Name: Ada",
            "Phone: 555-0100",
            "Extra: {'plan': 'pro'}",
            "------------------ User Detail End ----------------------------------",
            "",
            "",
        ]

    def test_ends_with_blank_line(self):
        header = build_header("2024-01-01", HostMetadata(), ProfileSnapshot())
        assert header.endswith("----\n\n")
