from src.meal_registration.meal_registration.database.connectivity import ConnectivityMonitor


def test_listeners_fire_only_on_offline_to_online():
    calls = []
    monitor = ConnectivityMonitor(initially_online=True)
    monitor.add_online_listener(lambda: calls.append("up"))

    monitor.report(True)
    monitor.report(False)
    monitor.report(False)
    monitor.report(True)
    monitor.report(True)

    assert calls == ["up"]
    assert monitor.is_online


def test_failing_listener_does_not_block_others():
    calls = []
    monitor = ConnectivityMonitor(initially_online=False)

    def _boom():
        raise RuntimeError("boom")

    monitor.add_online_listener(_boom)
    monitor.add_online_listener(lambda: calls.append("second"))

    monitor.report(True)

    assert calls == ["second"]


def test_check_uses_probe():
    state = {"up": False}
    monitor = ConnectivityMonitor(lambda: state["up"])

    assert monitor.check() is False
    state["up"] = True
    assert monitor.check() is True


def test_check_without_probe_keeps_reported_state():
    monitor = ConnectivityMonitor(initially_online=False)
    assert monitor.check() is False
