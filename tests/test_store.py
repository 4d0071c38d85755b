# Tests for the local SQLite store
#
# Coverage:
#   - app_config get/set/upsert
#   - Connection profile create, update, list ordering, get, delete
#   - Defaults and boolean columns

import pytest

from benchvault.db.store import ConnectionProfile, LocalStore, ProfileNotFoundError


def _profile(name="local", **overrides):
    fields = dict(name=name, host="127.0.0.1", username="root")
    fields.update(overrides)
    return ConnectionProfile(**fields)


class TestConfig:

    def test_missing_key_reads_empty(self, store):
        assert store.get_config("master_hash") == ""

    def test_set_and_get(self, store):
        store.set_config("master_salt", "c2FsdA==")
        assert store.get_config("master_salt") == "c2FsdA=="

    def test_set_overwrites(self, store):
        store.set_config("theme", "dark")
        store.set_config("theme", "light")
        assert store.get_config("theme") == "light"

    def test_persists_across_instances(self, store):
        store.set_config("master_hash", "aGFzaA==")
        assert LocalStore(store.db_path).get_config("master_hash") == "aGFzaA=="

    def test_creates_parent_directory(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "benchvault.db"
        LocalStore(db_path)
        assert db_path.exists()


class TestConnections:

    def test_save_assigns_id_and_timestamps(self, store):
        profile = _profile()
        profile_id = store.save_connection(profile)

        assert profile_id
        assert profile.id == profile_id
        assert profile.created_at
        assert profile.updated_at

    def test_defaults(self, store):
        loaded = store.get_connection(store.save_connection(_profile()))

        assert loaded.port == 3306
        assert loaded.ssh_port == 22
        assert loaded.ssh_auth == "key"
        assert loaded.password == ""
        assert loaded.use_ssl is False
        assert loaded.ssh_enabled is False

    def test_round_trip_all_fields(self, store):
        profile = _profile(
            port=3307,
            password="blob-1",
            default_db="shop",
            use_ssl=True,
            ssh_enabled=True,
            ssh_host="bastion.example.com",
            ssh_port=2222,
            ssh_user="deploy",
            ssh_auth="password",
            ssh_key_path="/home/deploy/.ssh/id_ed25519",
            ssh_password="blob-2",
            sort_order=3,
        )
        loaded = store.get_connection(store.save_connection(profile))

        assert loaded == profile

    def test_update_keeps_created_at(self, store):
        profile = _profile()
        profile_id = store.save_connection(profile)
        created_at = profile.created_at

        profile.host = "db.internal"
        assert store.save_connection(profile) == profile_id

        loaded = store.get_connection(profile_id)
        assert loaded.host == "db.internal"
        assert loaded.created_at == created_at
        assert len(store.list_connections()) == 1

    def test_list_ordered_by_sort_order_then_name(self, store):
        store.save_connection(_profile("zeta", sort_order=0))
        store.save_connection(_profile("alpha", sort_order=1))
        store.save_connection(_profile("beta", sort_order=0))

        assert [p.name for p in store.list_connections()] == ["beta", "zeta", "alpha"]

    def test_list_empty(self, store):
        assert store.list_connections() == []

    def test_get_missing(self, store):
        with pytest.raises(ProfileNotFoundError):
            store.get_connection("does-not-exist")

    def test_delete(self, store):
        profile_id = store.save_connection(_profile())
        store.delete_connection(profile_id)

        with pytest.raises(ProfileNotFoundError):
            store.get_connection(profile_id)

    def test_delete_missing_is_ignored(self, store):
        store.delete_connection("does-not-exist")

    def test_repr_hides_secrets(self):
        profile = _profile(password="hunter2", ssh_password="tunnel-pass")
        text = repr(profile)
        assert "hunter2" not in text
        assert "tunnel-pass" not in text
