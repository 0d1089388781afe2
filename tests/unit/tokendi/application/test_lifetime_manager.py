"""Unit tests for LifetimeManager."""

import threading
import time

import pytest

from tokendi.application.lifetime_manager import LifetimeManager
from tokendi.application.scope import Scope
from tokendi.domain import ILifetimeManager, Lifetime, LifetimeError, NoActiveScopeError, Registration, Token


def make_registration(lifetime, token=None):
    return Registration(token=token or Token("Service"), factory=object, lifetime=lifetime)


class TestLifetimeManagerInitialization:
    """Test cases for LifetimeManager initialization."""

    def test_manager_initialization(self):
        """Test that manager initializes with an empty singleton cache."""
        manager = LifetimeManager()
        assert manager._singleton_cache == {}
        assert manager.singleton_count == 0

    def test_manager_implements_interface(self):
        """Test that LifetimeManager implements ILifetimeManager."""
        assert isinstance(LifetimeManager(), ILifetimeManager)


class TestSingletonLifetime:
    """Test cases for singleton lifetime management."""

    def test_singleton_creates_instance_once(self):
        """Test that singleton factory runs only once."""
        manager = LifetimeManager()
        registration = make_registration(Lifetime.SINGLETON)
        call_count = [0]

        def factory():
            call_count[0] += 1
            return object()

        first = manager.get_or_create(registration, None, factory)
        second = manager.get_or_create(registration, None, factory)

        assert first is second
        assert call_count[0] == 1
        assert manager.is_cached(registration.token)

    def test_singleton_ignores_scope(self):
        """Test that the same singleton is returned with and without scopes."""
        manager = LifetimeManager()
        registration = make_registration(Lifetime.SINGLETON)
        scope_a = Scope(container=None)
        scope_b = Scope(container=None)

        direct = manager.get_or_create(registration, None, object)
        in_a = manager.get_or_create(registration, scope_a, object)
        in_b = manager.get_or_create(registration, scope_b, object)

        assert direct is in_a is in_b
        assert registration.token not in scope_a

    def test_failed_singleton_build_is_not_cached(self):
        """Test that a failing factory leaves no cache entry and can be retried."""
        manager = LifetimeManager()
        registration = make_registration(Lifetime.SINGLETON)
        attempts = [0]

        def flaky():
            attempts[0] += 1
            if attempts[0] == 1:
                raise RuntimeError("boom")
            return "ok"

        with pytest.raises(RuntimeError, match="boom"):
            manager.get_or_create(registration, None, flaky)

        assert not manager.is_cached(registration.token)
        assert manager.get_or_create(registration, None, flaky) == "ok"

    def test_concurrent_first_resolution_builds_once(self):
        """Test that racing threads share one singleton build."""
        manager = LifetimeManager()
        registration = make_registration(Lifetime.SINGLETON)
        call_count = [0]
        barrier = threading.Barrier(8)
        results = []

        def slow_factory():
            call_count[0] += 1
            time.sleep(0.01)
            return object()

        def worker():
            barrier.wait()
            results.append(manager.get_or_create(registration, None, slow_factory))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert call_count[0] == 1
        assert len(results) == 8
        assert all(result is results[0] for result in results)

    def test_clear_cache(self):
        """Test that clear_cache drops singletons."""
        manager = LifetimeManager()
        registration = make_registration(Lifetime.SINGLETON)
        first = manager.get_or_create(registration, None, object)

        manager.clear_cache()

        assert manager.singleton_count == 0
        assert manager.get_or_create(registration, None, object) is not first

    def test_evict(self):
        """Test that evict drops only the given token's singleton."""
        manager = LifetimeManager()
        evicted = make_registration(Lifetime.SINGLETON)
        kept = make_registration(Lifetime.SINGLETON)
        first = manager.get_or_create(evicted, None, object)
        manager.get_or_create(kept, None, object)

        manager.evict(evicted.token)
        manager.evict(Token("NeverBuilt"))

        assert not manager.is_cached(evicted.token)
        assert manager.is_cached(kept.token)
        assert manager.get_or_create(evicted, None, object) is not first


class TestScopedLifetime:
    """Test cases for scoped lifetime management."""

    def test_scoped_requires_scope(self):
        """Test that scoped resolution without a scope fails."""
        manager = LifetimeManager()
        registration = make_registration(Lifetime.SCOPED)

        with pytest.raises(NoActiveScopeError) as exc_info:
            manager.get_or_create(registration, None, object)

        assert exc_info.value.token is registration.token

    def test_scoped_cached_per_scope(self):
        """Test that each scope keeps its own instance."""
        manager = LifetimeManager()
        registration = make_registration(Lifetime.SCOPED)
        scope_a = Scope(container=None)
        scope_b = Scope(container=None)

        a1 = manager.get_or_create(registration, scope_a, object)
        a2 = manager.get_or_create(registration, scope_a, object)
        b1 = manager.get_or_create(registration, scope_b, object)

        assert a1 is a2
        assert a1 is not b1
        assert registration.token in scope_a
        assert scope_a.get_or_build(registration.token, object) is a1
        assert manager.singleton_count == 0


class TestPerRequestLifetime:
    """Test cases for per-request lifetime management."""

    def test_per_request_always_builds(self):
        """Test that per-request creates a new instance each call."""
        manager = LifetimeManager()
        registration = make_registration(Lifetime.PER_REQUEST)
        scope = Scope(container=None)

        first = manager.get_or_create(registration, None, object)
        second = manager.get_or_create(registration, scope, object)

        assert first is not second
        assert len(scope) == 0
        assert manager.singleton_count == 0


class TestUnknownLifetime:
    """Test cases for lifetimes the manager does not know."""

    def test_unknown_lifetime_raises(self):
        """Test that unrecognised lifetimes fail loudly instead of defaulting."""
        manager = LifetimeManager()
        registration = Registration.model_construct(
            token=Token("Service"),
            lifetime="forever",
            builder=None,
            dependencies=(),
            params=(),
            factory=object,
        )

        with pytest.raises(LifetimeError, match="forever"):
            manager.get_or_create(registration, None, object)
