"""The engine runs on whatever the surrounding application hands it."""

from core import AssistantClient, AuthProvider, ProfileStore, collaborators
from engine import run_scenario


class DictStore:
    def __init__(self):
        self._records = {}

    def get(self, owner_key):
        return self._records.get(owner_key)

    def set(self, owner_key, profile):
        self._records[owner_key] = dict(profile)


class SignedInUser:
    def __init__(self, uid):
        self.uid = uid

    def current_user(self):
        return self.uid

    def logout(self):
        self.uid = None


class OfflineAssistant:
    def complete(self, messages, system_prompt):
        raise ConnectionError("assistant unreachable")


def test_in_memory_store_satisfies_protocol():
    assert isinstance(DictStore(), ProfileStore)
    assert not isinstance(object(), ProfileStore)


def test_stored_record_runs_through_engine(ten_year_profile, as_of):
    store = DictStore()
    store.set("owner-1", ten_year_profile)
    result = run_scenario(store.get("owner-1"), as_of=as_of)
    assert result.timeline.horizon_years == 10


def test_missing_record_runs_with_defaults(as_of):
    record = DictStore().get("nobody") or {}
    result = run_scenario(record, as_of=as_of)
    assert result.gap.savings_goal == 0


def test_engine_does_not_depend_on_assistant(ten_year_profile, as_of):
    assistant = OfflineAssistant()
    assert isinstance(assistant, AssistantClient)
    result = run_scenario(ten_year_profile, as_of=as_of)
    assert result.recommendations.summary.total_recommendations > 0


def test_auth_provider_key_selects_stored_profile(ten_year_profile, as_of):
    auth = SignedInUser("owner-7")
    assert isinstance(auth, AuthProvider)
    assert collaborators.AuthProvider is AuthProvider

    store = DictStore()
    store.set(auth.current_user(), ten_year_profile)
    result = run_scenario(store.get(auth.current_user()), as_of=as_of)
    assert result.timeline.current_age == 8

    auth.logout()
    assert auth.current_user() is None


def test_store_is_not_an_auth_provider():
    assert not isinstance(DictStore(), AuthProvider)
