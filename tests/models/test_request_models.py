"""Tests for version policies, package requests and run options."""

import pytest
from pydantic import ValidationError

from nuget_promote.models import (
    ExactVersion,
    FeedSettings,
    LatestVersion,
    PackageRequest,
    PromoteOptions,
    PromoteResult,
    VersionRangePolicy,
    parse_version_policy,
)
from nuget_promote.versioning import BestMatchStrategy, NuGetVersion, VersionRange


class TestParseVersionPolicy:
    """Tests for parse_version_policy()."""

    def test_latest(self):
        """Test that 'latest' in any case becomes LatestVersion."""
        assert isinstance(parse_version_policy("latest"), LatestVersion)
        assert isinstance(parse_version_policy("LATEST"), LatestVersion)

    def test_exact(self):
        """Test that a version becomes ExactVersion."""
        policy = parse_version_policy("4.3.1")

        assert policy == ExactVersion(version=NuGetVersion(4, 3, 1))

    def test_range(self):
        """Test that a range becomes VersionRangePolicy."""
        policy = parse_version_policy("[4.1.0,4.1.2)")

        assert isinstance(policy, VersionRangePolicy)
        assert policy.version_range == VersionRange.parse("[4.1.0,4.1.2)")

    def test_invalid(self):
        """Test that garbage raises ValueError."""
        with pytest.raises(ValueError, match="Expected a valid version or version range"):
            parse_version_policy("newest")


class TestPackageRequest:
    """Tests for PackageRequest."""

    def test_describe(self):
        """Test the request description used in logs."""
        request = PackageRequest(
            id="System.Runtime",
            policies=[parse_version_policy("[4.1.0,4.1.2)"), parse_version_policy("4.3.1"), LatestVersion()],
        )

        assert request.describe() == "System.Runtime (>= 4.1.0 && < 4.1.2), 4.3.1, latest"

    def test_policies_required(self):
        """Test that a request needs at least one policy."""
        with pytest.raises(ValidationError):
            PackageRequest(id="A", policies=[])

    def test_policies_from_dicts(self):
        """Test the discriminated union validates tagged dictionaries."""
        request = PackageRequest.model_validate(
            {"id": "A", "policies": [{"kind": "exact", "version": "1.0.0"}, {"kind": "latest"}]}
        )

        assert isinstance(request.policies[0], ExactVersion)
        assert isinstance(request.policies[1], LatestVersion)

    def test_id_stripped(self):
        """Test that surrounding whitespace is removed from ids."""
        assert PackageRequest(id=" A ", policies=[LatestVersion()]).id == "A"


class TestFeedSettings:
    """Tests for FeedSettings."""

    def test_credentials(self):
        """Test has_credentials needs both user and password."""
        assert FeedSettings(url="https://feed", username="u", password="p").has_credentials
        assert not FeedSettings(url="https://feed", username="u").has_credentials

    def test_empty_url(self):
        """Test that an empty URL is rejected."""
        with pytest.raises(ValidationError, match="Feed URL must not be empty"):
            FeedSettings(url=" ")


class TestPromoteOptions:
    """Tests for PromoteOptions."""

    def test_defaults(self):
        """Test default run options."""
        options = PromoteOptions()

        assert not options.dry_run
        assert options.use_cache
        assert options.dependency_version == BestMatchStrategy.HIGHEST
        assert not options.resolve_present_dependencies

    def test_force_push_implies_resolving_dependencies(self):
        """Test that force_push expands dependencies of present packages."""
        assert PromoteOptions(force_push=True).resolve_present_dependencies
        assert PromoteOptions(always_resolve_deps=True).resolve_present_dependencies

    def test_strategy_from_string(self):
        """Test the dependency strategy accepts its string value."""
        assert PromoteOptions(dependency_version="lowest").dependency_version == BestMatchStrategy.LOWEST

    def test_unknown_field_rejected(self):
        """Test that extra fields are forbidden."""
        with pytest.raises(ValidationError):
            PromoteOptions(parallel=True)


class TestPromoteResult:
    """Tests for PromoteResult."""

    def test_promoted_count(self):
        """Test promoted_count reflects the promoted list."""
        result = PromoteResult(promoted=[{"id": "A", "version": "1.0.0"}])

        assert result.promoted_count == 1
        assert not result.dry_run
