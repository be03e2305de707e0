"""Tests for the singleton resource manager."""

import threading
import time

import pytest

from dispatchkit.domain.base.exceptions import IllegalConstructionError
from dispatchkit.infrastructure.patterns import (
    ManagedSingleton,
    SingletonManager,
    SingletonRegistry,
    SingletonState,
    get_singleton,
    get_singleton_registry,
    reset_singletons,
)


class CountingResource(ManagedSingleton):
    """Guarded resource counting how often it is constructed."""

    constructions = 0
    _count_lock = threading.Lock()

    def __init__(self, label="default"):
        # Widen the check-then-act window for the contention tests
        time.sleep(0.01)
        with CountingResource._count_lock:
            CountingResource.constructions += 1
        self.label = label
        self.closed = False

    def close(self):
        self.closed = True


class LabelledResource(CountingResource):
    """Guarded subclass with a fixed label."""

    def __init__(self):
        super().__init__(label="labelled")


class PlainResource:
    """Unguarded resource type."""

    def __init__(self):
        self.values = {}


class TestSingletonManager:
    """Test lifecycle of a single managed resource."""

    def setup_method(self):
        """Set up test fixtures."""
        CountingResource.constructions = 0
        self.manager = SingletonManager(CountingResource)

    def test_starts_uninitialized(self):
        assert self.manager.state is SingletonState.UNINITIALIZED
        assert not self.manager.is_initialized

    def test_first_access_constructs_once(self):
        """Test the UNINITIALIZED -> INITIALIZED transition."""
        instance = self.manager.get_instance()

        assert isinstance(instance, CountingResource)
        assert self.manager.state is SingletonState.INITIALIZED
        assert CountingResource.constructions == 1

    def test_repeated_access_returns_same_reference(self):
        """Test that N sequential calls return the identical object."""
        first = self.manager.get_instance()

        for _ in range(50):
            assert self.manager.get_instance() is first
        assert CountingResource.constructions == 1

    def test_arguments_only_apply_to_first_construction(self):
        first = self.manager.get_instance("primary")
        second = self.manager.get_instance("ignored")

        assert second is first
        assert second.label == "primary"

    def test_reset_returns_to_uninitialized(self):
        """Test the INITIALIZED -> UNINITIALIZED transition."""
        first = self.manager.get_instance()

        self.manager.reset()

        assert self.manager.state is SingletonState.UNINITIALIZED
        assert first.closed is True
        second = self.manager.get_instance()
        assert second is not first
        assert CountingResource.constructions == 2

    def test_reset_when_uninitialized_is_noop(self):
        self.manager.reset()

        assert self.manager.state is SingletonState.UNINITIALIZED

    def test_custom_factory(self):
        manager = SingletonManager(CountingResource, lambda: CountingResource("from-factory"))

        assert manager.get_instance().label == "from-factory"

    def test_unguarded_type_can_be_managed(self):
        manager = SingletonManager(PlainResource)

        assert manager.get_instance() is manager.get_instance()

    def test_concurrent_first_access_constructs_exactly_once(self):
        """Test that racing first calls are serialized into one construction."""
        for _ in range(5):
            CountingResource.constructions = 0
            manager = SingletonManager(CountingResource)
            barrier = threading.Barrier(20)
            results = []
            results_lock = threading.Lock()

            def worker():
                barrier.wait()
                instance = manager.get_instance()
                with results_lock:
                    results.append(instance)

            threads = [threading.Thread(target=worker) for _ in range(20)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

            assert CountingResource.constructions == 1
            assert len({id(r) for r in results}) == 1


class TestIllegalConstruction:
    """Test that guarded resources refuse construction outside a manager."""

    def test_direct_construction_fails(self):
        with pytest.raises(IllegalConstructionError, match="CountingResource is a managed singleton") as exc_info:
            CountingResource()

        assert exc_info.value.resource_type is CountingResource

    def test_direct_construction_fails_after_manager_built_one(self):
        manager = SingletonManager(CountingResource)
        manager.get_instance()

        with pytest.raises(IllegalConstructionError):
            CountingResource()

    def test_manager_for_base_type_can_build_subclass(self):
        manager = SingletonManager(CountingResource, lambda: LabelledResource())

        instance = manager.get_instance()

        assert isinstance(instance, LabelledResource)
        assert instance.label == "labelled"
        with pytest.raises(IllegalConstructionError):
            LabelledResource()

    def test_manager_for_subclass_cannot_build_base_type(self):
        manager = SingletonManager(LabelledResource, lambda: CountingResource())

        with pytest.raises(IllegalConstructionError):
            manager.get_instance()

    def test_factory_for_other_type_cannot_build_guarded_resource(self):
        manager = SingletonManager(PlainResource, lambda: CountingResource())

        with pytest.raises(IllegalConstructionError):
            manager.get_instance()


class TestSingletonRegistry:
    """Test the registry of singleton managers."""

    def setup_method(self):
        CountingResource.constructions = 0
        self.registry = SingletonRegistry()

    def test_get_returns_same_instance(self):
        assert self.registry.get(CountingResource) is self.registry.get(CountingResource)

    def test_distinct_types_get_distinct_managers(self):
        assert self.registry.manager_for(CountingResource) is not self.registry.manager_for(PlainResource)
        assert self.registry.manager_for(PlainResource) is self.registry.manager_for(PlainResource)

    def test_is_initialized(self):
        assert not self.registry.is_initialized(CountingResource)

        self.registry.get(CountingResource)

        assert self.registry.is_initialized(CountingResource)

    def test_reset_single_type(self):
        counting = self.registry.get(CountingResource)
        plain = self.registry.get(PlainResource)

        self.registry.reset(CountingResource)

        assert self.registry.get(CountingResource) is not counting
        assert self.registry.get(PlainResource) is plain

    def test_reset_all(self):
        self.registry.get(CountingResource)
        self.registry.get(PlainResource)

        self.registry.reset()

        assert not self.registry.is_initialized(CountingResource)
        assert not self.registry.is_initialized(PlainResource)


class TestSingletonAccess:
    """Test the process-wide access functions."""

    def test_get_singleton_uses_global_registry(self):
        instance = get_singleton(PlainResource)

        assert get_singleton_registry().get(PlainResource) is instance

    def test_mutation_visible_to_later_callers(self):
        get_singleton(PlainResource).values["mode"] = "live"

        assert get_singleton(PlainResource).values["mode"] == "live"

    def test_reset_singletons(self):
        first = get_singleton(PlainResource)

        reset_singletons()

        assert get_singleton(PlainResource) is not first
