"""Integration tests for interception proxies combined with component wiring."""

import time
from abc import ABC, abstractmethod

import pytest

from rigging import NO_RESULT, Advice, ComponentRegistry, InterceptorRegistry, Marker, inject
from rigging.infrastructure.testing import RecordingInterceptor


class Transactional(Marker):
    pass


class Timed(Marker):
    pass


class Cached(Marker):
    pass


class Database:
    def __init__(self):
        self.log = []

    def execute(self, statement: str) -> None:
        self.log.append(statement)


class AccountRepository(ABC):
    @Timed()
    @Transactional()
    @abstractmethod
    def transfer(self, source: str, target: str, amount: int) -> int:
        pass

    @Cached()
    @abstractmethod
    def balance(self, account: str) -> int:
        pass


class SqlAccountRepository(AccountRepository):
    @inject
    def __init__(self, database: Database):
        self.database = database
        self.balances = {"alice": 100, "bob": 0}

    def transfer(self, source: str, target: str, amount: int) -> int:
        if self.balances[source] < amount:
            raise ValueError("insufficient funds")
        self.database.execute(f"UPDATE {source} -{amount}")
        self.database.execute(f"UPDATE {target} +{amount}")
        self.balances[source] -= amount
        self.balances[target] += amount
        return self.balances[source]

    def balance(self, account: str) -> int:
        self.database.execute(f"SELECT {account}")
        return self.balances[account]


class TransactionAdvice(Advice):
    def __init__(self, database: Database):
        self.database = database

    def before(self, target, operation, arguments):
        self.database.execute("BEGIN")

    def after(self, target, operation, arguments, result):
        self.database.execute("ROLLBACK" if result is NO_RESULT else "COMMIT")


class TimingAdvice(Advice):
    def __init__(self):
        self.durations = []
        self._start = None

    def before(self, target, operation, arguments):
        self._start = time.perf_counter()

    def after(self, target, operation, arguments, result):
        self.durations.append((operation.name, time.perf_counter() - self._start))


def caching():
    cache = {}

    def interceptor(target, operation, arguments, proceed):
        key = (operation.name, arguments.args)
        if key not in cache:
            cache[key] = proceed(target, operation, arguments)
        return cache[key]

    return interceptor


@pytest.fixture
def database():
    return Database()


@pytest.fixture
def registry(database):
    registry = ComponentRegistry()
    registry.register_instance(Database, database)
    registry.register_provider_class(AccountRepository, SqlAccountRepository)
    return registry


@pytest.fixture
def interceptors(database):
    interceptors = InterceptorRegistry()
    interceptors.add_advice(Transactional, TransactionAdvice(database))
    interceptors.add_interceptor(Cached, caching())
    return interceptors


class TestInterceptionPipeline:
    """Test proxies wrapping wired components."""

    def test_transaction_commits_around_successful_call(self, registry, interceptors, database):
        """Test that the advice brackets the real statements."""
        repository = interceptors.create_proxy(AccountRepository, registry.lookup(AccountRepository))

        assert repository.transfer("alice", "bob", 30) == 70
        assert database.log == ["BEGIN", "UPDATE alice -30", "UPDATE bob +30", "COMMIT"]

    def test_transaction_rolls_back_on_failure(self, registry, interceptors, database):
        """Test that the after hook sees NO_RESULT when the call raises."""
        repository = interceptors.create_proxy(AccountRepository, registry.lookup(AccountRepository))

        with pytest.raises(ValueError, match="insufficient funds"):
            repository.transfer("bob", "alice", 10)

        assert database.log == ["BEGIN", "ROLLBACK"]

    def test_markers_order_the_chain(self, registry, interceptors, database):
        """Test that the first declared marker wraps the second one."""
        timing = TimingAdvice()
        journal = []
        interceptors.add_advice(Timed, timing)
        interceptors.add_interceptor(Timed, RecordingInterceptor("timed", journal))
        interceptors.add_interceptor(Transactional, RecordingInterceptor("transactional", journal))
        repository = interceptors.create_proxy(AccountRepository, registry.lookup(AccountRepository))

        repository.transfer("alice", "bob", 1)

        assert journal == [
            "timed enter transfer",
            "transactional enter transfer",
            "transactional exit transfer",
            "timed exit transfer",
        ]
        assert [name for name, _ in timing.durations] == ["transfer"]

    def test_caching_interceptor_skips_repeated_calls(self, registry, interceptors, database):
        """Test that an interceptor can avoid calling the target."""
        repository = interceptors.create_proxy(AccountRepository, registry.lookup(AccountRepository))

        assert repository.balance("alice") == 100
        assert repository.balance("alice") == 100

        assert database.log == ["SELECT alice"]

    def test_each_proxy_wraps_its_own_target(self, registry, interceptors):
        """Test that proxies do not share targets."""
        first = interceptors.create_proxy(AccountRepository, registry.lookup(AccountRepository))
        second = interceptors.create_proxy(AccountRepository, registry.lookup(AccountRepository))

        first.transfer("alice", "bob", 50)

        assert second.transfer("alice", "bob", 10) == 90

    def test_proxy_can_be_registered_as_component(self, registry, interceptors, database):
        """Test that a proxy is a valid instance binding of its contract."""

        class TransferService:
            @inject
            def __init__(self, accounts: AccountRepository):
                self.accounts = accounts

        wired = ComponentRegistry()
        wired.register_instance(
            AccountRepository,
            interceptors.create_proxy(AccountRepository, registry.lookup(AccountRepository)),
        )
        wired.register_provider_class(TransferService, TransferService)

        wired.lookup(TransferService).accounts.transfer("alice", "bob", 5)

        assert database.log[0] == "BEGIN"
        assert database.log[-1] == "COMMIT"
