"""
Tests for configuration loading.
"""

import pytest

from rbln_metrics_exporter.config import ConfigError, ConfigLoader
from rbln_metrics_exporter.config.schema import Config, KubernetesMode, detect_node_name
from rbln_metrics_exporter.daemon.client import InventoryMode


ENV = {"NODE_NAME": "node1"}


def load(env=None, **overrides) -> Config:
    return ConfigLoader().load(env={**ENV, **(env or {})}, overrides=overrides)


class TestDefaults:
    def test_defaults(self) -> None:
        config = load()

        assert config.daemon.url == "127.0.0.1:50051"
        assert config.exporter.port == 9090
        assert config.exporter.interval == 5
        assert config.exporter.oneshot is False
        assert config.exporter.node_name == "node1"
        assert config.kubernetes_mode == KubernetesMode.AUTO
        assert config.inventory_mode == InventoryMode.AGGREGATED
        assert config.logging.level == "info"
        assert config.logging.format == "json"
        assert config.logging.file is None

    def test_node_name_falls_back_to_hostname(self, monkeypatch) -> None:
        monkeypatch.setattr("socket.gethostname", lambda: "host-a")

        assert detect_node_name({}) == "host-a"

    def test_node_name_unknown(self, monkeypatch) -> None:
        monkeypatch.setattr("socket.gethostname", lambda: "")

        assert detect_node_name({}) == "unknown"


class TestEnvironment:
    def test_values_from_env(self) -> None:
        config = load({
            "RBLN_METRICS_EXPORTER_RBLN_DAEMON_URL": "daemon:50051",
            "RBLN_METRICS_EXPORTER_PORT": "9100",
            "RBLN_METRICS_EXPORTER_INTERVAL": "10",
            "RBLN_METRICS_EXPORTER_ONESHOT": "true",
            "RBLN_METRICS_EXPORTER_KUBERNETES_MODE": "off",
            "RBLN_METRICS_EXPORTER_INVENTORY_MODE": "per_device",
            "RBLN_METRICS_EXPORTER_LOG_LEVEL": "debug",
            "RBLN_METRICS_EXPORTER_LOG_FORMAT": "json",
        })

        assert config.daemon.url == "daemon:50051"
        assert config.exporter.port == 9100
        assert config.exporter.interval == 10
        assert config.exporter.oneshot is True
        assert config.kubernetes_mode == KubernetesMode.OFF
        assert config.inventory_mode == InventoryMode.PER_DEVICE
        assert config.logging.level == "debug"
        assert config.logging.format == "json"

    def test_unparsable_int_uses_default(self) -> None:
        config = load({"RBLN_METRICS_EXPORTER_PORT": "ninety", "RBLN_METRICS_EXPORTER_INTERVAL": ""})

        assert config.exporter.port == 9090
        assert config.exporter.interval == 5

    @pytest.mark.parametrize("value,expected", [
        ("1", True), ("YES", True), ("on", True),
        ("0", False), ("no", False), ("maybe", False),
    ])
    def test_bool_spellings(self, value: str, expected: bool) -> None:
        config = load({"RBLN_METRICS_EXPORTER_ONESHOT": value})

        assert config.exporter.oneshot is expected

    def test_reads_process_environment(self, clean_env, monkeypatch) -> None:
        monkeypatch.setenv("RBLN_METRICS_EXPORTER_PORT", "9200")

        config = ConfigLoader().load()

        assert config.exporter.port == 9200
        assert config.exporter.node_name == "node1"


class TestOverrides:
    def test_overrides_win(self) -> None:
        config = load(
            {"RBLN_METRICS_EXPORTER_PORT": "9100"},
            port=9300,
            interval=30,
            node_name="override",
        )

        assert config.exporter.port == 9300
        assert config.exporter.interval == 30
        assert config.exporter.node_name == "override"

    def test_none_overrides_ignored(self) -> None:
        config = load({"RBLN_METRICS_EXPORTER_PORT": "9100"}, port=None)

        assert config.exporter.port == 9100

    def test_unknown_override(self) -> None:
        with pytest.raises(ConfigError):
            load(colour="blue")


class TestValidation:
    @pytest.mark.parametrize("interval", [0, 61, -5])
    def test_interval_out_of_range(self, interval: int) -> None:
        with pytest.raises(ConfigError):
            load(interval=interval)

    @pytest.mark.parametrize("interval", [1, 60])
    def test_interval_bounds(self, interval: int) -> None:
        assert load(interval=interval).exporter.interval == interval

    def test_invalid_port(self) -> None:
        with pytest.raises(ConfigError):
            load(port=70000)

    def test_kubernetes_mode_case_insensitive(self) -> None:
        assert load(kubernetes_mode="ON").kubernetes_mode == KubernetesMode.ON

    def test_invalid_kubernetes_mode(self) -> None:
        with pytest.raises(ConfigError):
            load(kubernetes_mode="sometimes")

    def test_invalid_inventory_mode(self) -> None:
        with pytest.raises(ConfigError):
            load(inventory_mode="batch")

    def test_invalid_log_format(self) -> None:
        with pytest.raises(ConfigError):
            load(log_format="xml")

    @pytest.mark.parametrize("url", ["http://daemon:50051", "https://daemon:50051"])
    def test_scheme_stripped(self, url: str) -> None:
        assert load(rbln_daemon_url=url).daemon.url == "daemon:50051"


class TestWarnings:
    def test_clean_config(self) -> None:
        loader = ConfigLoader()
        config = loader.load(env=ENV, overrides={"kubernetes_mode": "off"})

        assert loader.validate(config) == []

    def test_kubernetes_on_without_socket(self, tmp_path) -> None:
        loader = ConfigLoader()
        config = loader.load(env=ENV, overrides={"kubernetes_mode": "on"})
        config.kubernetes.pod_resources_socket = str(tmp_path / "kubelet.sock")

        warnings = loader.validate(config)

        assert len(warnings) == 1
        assert "kubelet.sock" in warnings[0]

    def test_unknown_node_name(self) -> None:
        loader = ConfigLoader()
        config = loader.load(env=ENV, overrides={"node_name": "unknown", "kubernetes_mode": "off"})

        assert any("node name" in warning for warning in loader.validate(config))
