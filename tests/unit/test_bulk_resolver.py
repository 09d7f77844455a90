"""Unit tests for the bulk resolver service."""

import io
import threading
import time
from unittest.mock import MagicMock, patch

import dns.exception
import dns.resolver
import pytest

from src.models.lookup_result import LookupResult, LookupStatus
from src.services.bulk_resolver import (
    categorize_failure,
    forward_lookup,
    make_resolver,
    read_names,
    resolve_stream,
    reverse_lookup,
)


def _rdata(text):
    return MagicMock(**{"to_text.return_value": text})


def _ptr(name):
    rdata = MagicMock()
    rdata.target.to_text.return_value = name
    return rdata


class TestMakeResolver:
    """Test make_resolver() timeout configuration."""

    @patch("src.services.bulk_resolver.dns.resolver.Resolver")
    def test_timeouts(self, mock_resolver_class):
        mock_resolver = MagicMock()
        mock_resolver.nameservers = ["192.0.2.53", "198.51.100.53"]
        mock_resolver_class.return_value = mock_resolver

        resolver = make_resolver(timeout_ms=1500, attempts=2)

        assert resolver.timeout == 1.5
        assert resolver.lifetime == 6.0


class TestCategorizeFailure:
    def test_categories(self):
        assert categorize_failure(dns.resolver.NXDOMAIN()) == "nxdomain"
        assert categorize_failure(dns.resolver.NoAnswer()) == "nodata"
        assert categorize_failure(dns.exception.Timeout()) == "temporary"
        assert categorize_failure(dns.resolver.NoNameservers()) == "temporary"


class TestForwardLookup:
    """Test forward_lookup() classification."""

    def test_resolved(self):
        resolver = MagicMock()
        resolver.resolve.return_value = [_rdata("127.0.0.2"), _rdata("127.0.0.10")]

        result = forward_lookup(resolver, "2.0.0.127.zen.spamhaus.org")

        resolver.resolve.assert_called_once_with("2.0.0.127.zen.spamhaus.org", "A")
        assert result.status == LookupStatus.RESOLVED
        assert result.answers == ["127.0.0.2", "127.0.0.10"]

    def test_nxdomain(self):
        resolver = MagicMock()
        resolver.resolve.side_effect = dns.resolver.NXDOMAIN()

        result = forward_lookup(resolver, "1.2.0.192.zen.spamhaus.org")

        assert result.format_line() == "1.2.0.192.zen.spamhaus.org:NXDOMAIN"

    def test_timeout(self):
        resolver = MagicMock()
        resolver.resolve.side_effect = dns.exception.Timeout()

        result = forward_lookup(resolver, "1.2.0.192.bl.example")

        assert result.status == LookupStatus.TEMPORARY_ERROR

    def test_nodata_single_family(self):
        resolver = MagicMock()
        resolver.resolve.side_effect = dns.resolver.NoAnswer()

        assert forward_lookup(resolver, "a.example", ("A",)).format_line() == (
            "a.example:No A records found"
        )
        assert forward_lookup(resolver, "a.example", ("AAAA",)).format_line() == (
            "a.example:No AAAA records found"
        )

    def test_nodata_both_families(self):
        resolver = MagicMock()
        resolver.resolve.side_effect = dns.resolver.NoAnswer()

        result = forward_lookup(resolver, "a.example", ("A", "AAAA"))

        assert result.format_line() == "a.example:No records found"

    def test_partial_success_wins(self):
        resolver = MagicMock()
        resolver.resolve.side_effect = [dns.exception.Timeout(), [_rdata("2001:db8::1")]]

        result = forward_lookup(resolver, "a.example", ("A", "AAAA"))

        assert result.format_line() == "a.example=2001:db8::1"

    def test_nxdomain_beats_temporary(self):
        resolver = MagicMock()
        resolver.resolve.side_effect = [dns.exception.Timeout(), dns.resolver.NXDOMAIN()]

        result = forward_lookup(resolver, "a.example", ("A", "AAAA"))

        assert result.status == LookupStatus.NXDOMAIN

    def test_temporary_beats_nodata(self):
        resolver = MagicMock()
        resolver.resolve.side_effect = [dns.resolver.NoAnswer(), dns.resolver.NoNameservers()]

        result = forward_lookup(resolver, "a.example", ("A", "AAAA"))

        assert result.status == LookupStatus.TEMPORARY_ERROR


class TestReverseLookup:
    """Test reverse_lookup() classification."""

    def test_resolved(self):
        resolver = MagicMock()
        resolver.resolve_address.return_value = [_ptr("dns.example."), _ptr("other.example.")]

        result = reverse_lookup(resolver, "192.0.2.1")

        resolver.resolve_address.assert_called_once_with("192.0.2.1")
        assert result.format_line() == "192.0.2.1=dns.example."

    def test_invalid_address(self):
        resolver = MagicMock()

        result = reverse_lookup(resolver, "not-an-ip")

        assert result.format_line() == "not-an-ip:Invalid IP address format"
        resolver.resolve_address.assert_not_called()

    @pytest.mark.parametrize(
        "exception, status",
        [
            (dns.resolver.NXDOMAIN(), LookupStatus.NXDOMAIN),
            (dns.resolver.NoAnswer(), LookupStatus.NO_RECORDS),
            (dns.exception.Timeout(), LookupStatus.TEMPORARY_ERROR),
            (dns.resolver.NoNameservers(), LookupStatus.TEMPORARY_ERROR),
        ],
    )
    def test_failures(self, exception, status):
        resolver = MagicMock()
        resolver.resolve_address.side_effect = exception

        assert reverse_lookup(resolver, "2001:db8::1").status == status


def test_read_names_skips_blank_comment_and_undecodable_lines():
    stream = io.BytesIO(b"a.example\n\n# comment\n  b.example \r\n\xff\xfe\nc.example")

    assert list(read_names(stream)) == ["a.example", "b.example", "c.example"]


class TestResolveStream:
    """Test resolve_stream() ordering and concurrency limits."""

    @staticmethod
    def _lookup(delays):
        def lookup(name):
            time.sleep(delays.get(name, 0))
            return LookupResult(name, LookupStatus.NXDOMAIN)

        return lookup

    def test_ordered_preserves_input_order(self):
        lookup = self._lookup({"slow": 0.2})

        results = resolve_stream(["slow", "fast1", "fast2"], lookup, concurrency=3)

        assert [r.name for r in results] == ["slow", "fast1", "fast2"]

    def test_unordered_yields_as_completed(self):
        lookup = self._lookup({"slow": 0.3})

        names = [r.name for r in resolve_stream(["slow", "fast"], lookup, 2, ordered=False)]

        assert names == ["fast", "slow"]

    @pytest.mark.parametrize("ordered", [True, False])
    def test_concurrency_limit(self, ordered):
        lock = threading.Lock()
        state = {"active": 0, "peak": 0}

        def lookup(name):
            with lock:
                state["active"] += 1
                state["peak"] = max(state["peak"], state["active"])
            time.sleep(0.01)
            with lock:
                state["active"] -= 1
            return LookupResult(name, LookupStatus.NXDOMAIN)

        names = [f"{i}.example" for i in range(40)]
        results = list(resolve_stream(names, lookup, concurrency=4, ordered=ordered))

        assert len(results) == 40
        assert sorted(r.name for r in results) == sorted(names)
        assert state["peak"] <= 4

    def test_unexpected_error_becomes_temporary(self):
        def lookup(name):
            raise RuntimeError("socket exploded")

        results = list(resolve_stream(["a.example"], lookup))

        assert results[0].format_line() == "a.example:Temporary error"

    def test_empty_input(self):
        assert list(resolve_stream([], self._lookup({}))) == []

    def test_invalid_concurrency(self):
        with pytest.raises(ValueError, match="concurrency must be at least 1"):
            list(resolve_stream(["a.example"], self._lookup({}), concurrency=0))
