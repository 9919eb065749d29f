from astropulse.domain.value_objects.surface_state import SurfaceState
from astropulse.domain.value_objects.visible_range import VisibleRange
from astropulse.infrastructure.surfaces.headless_surface import HeadlessChartSurface
from astropulse.state.time_sync import MAX_PROPAGATION_PASSES, TimeSyncCoordinator

R0 = VisibleRange(1_000, 2_000)
R1 = VisibleRange(1_500, 2_500)
R2 = VisibleRange(3_000, 4_000)


class SilentSurface(HeadlessChartSurface):
    """Widget that applies ranges without emitting a change notification."""

    def set_visible_range(self, visible_range):
        self.set_range_calls += 1
        self._range = visible_range


class FailingSurface(HeadlessChartSurface):
    def set_visible_range(self, visible_range):
        self.set_range_calls += 1
        raise RuntimeError("widget disposed")


class NudgingSurface(HeadlessChartSurface):
    """Replica whose update makes the master move again (re-entrant notify)."""

    def __init__(self, master, nudge):
        super().__init__("nudger")
        self._master = master
        self._nudge = nudge

    def set_visible_range(self, visible_range):
        super().set_visible_range(visible_range)
        self._master.user_change_range(self._nudge)


def _overlay(*symbols):
    surfaces = {s: HeadlessChartSurface(s) for s in symbols}
    sync = TimeSyncCoordinator()
    sync.attach(surfaces)
    return sync, surfaces


def test_first_symbol_is_master():
    sync, _ = _overlay("BTC", "ETH", "SOL")

    assert sync.master_symbol == "BTC"
    assert sync.symbols == ["BTC", "ETH", "SOL"]


def test_initial_range_applied_once_to_everyone():
    sync, surfaces = _overlay("BTC", "ETH", "SOL", "XRP")

    assert sync.apply_initial_range(R0) is True
    assert sync.apply_initial_range(R1) is False

    for surface in surfaces.values():
        assert surface.get_visible_range() == R0
        assert surface.set_range_calls == 1
    assert all(sync.state_of(s) is SurfaceState.IDLE for s in surfaces)
    assert sync.initial_range_applied


def test_master_pan_reaches_three_replicas_exactly_once():
    sync, surfaces = _overlay("BTC", "ETH", "SOL", "XRP")
    sync.apply_initial_range(R0)

    surfaces["BTC"].user_change_range(R1)

    for symbol in ("ETH", "SOL", "XRP"):
        assert surfaces[symbol].get_visible_range() == R1
        assert surfaces[symbol].set_range_calls == 2
        assert sync.state_of(symbol) is SurfaceState.IDLE
    assert surfaces["BTC"].set_range_calls == 1
    assert sync.stats["propagations"] == 2


def test_replica_echo_never_reaches_master():
    sync, surfaces = _overlay("BTC", "ETH", "SOL", "XRP")
    sync.apply_initial_range(R0)
    surfaces["BTC"].user_change_range(R1)
    surfaces["BTC"].user_change_range(R2)

    # each replica notified once per propagation and each echo swallowed
    assert sync.stats["echoes_suppressed"] == 1 + 3 * 3
    assert sync.stats["unexpected_changes"] == 0
    assert surfaces["BTC"].set_range_calls == 1


def test_master_change_during_propagation_converges_after_the_pass():
    master = HeadlessChartSurface("BTC")
    nudger = NudgingSurface(master, nudge=R2)
    surfaces = {"BTC": master, "ETH": HeadlessChartSurface("ETH"), "NUDGE": nudger}
    sync = TimeSyncCoordinator()
    sync.attach(surfaces)

    master.user_change_range(R1)

    assert sync.stats["reentrant_deferred"] == 1
    assert sync.stats["reentrant_dropped"] == 0
    assert sync.stats["propagations"] == 2
    assert all(s.get_visible_range() == R2 for s in surfaces.values())
    assert all(sync.state_of(s) is SurfaceState.IDLE for s in surfaces)


def test_master_that_never_settles_is_bounded():
    master = HeadlessChartSurface("BTC")

    class Restless(HeadlessChartSurface):
        def set_visible_range(self, visible_range):
            super().set_visible_range(visible_range)
            master.user_change_range(VisibleRange(visible_range.from_ + 10, visible_range.to + 10))

    restless = Restless("ETH")
    sync = TimeSyncCoordinator()
    sync.attach({"BTC": master, "ETH": restless})

    master.user_change_range(R1)

    assert sync.stats["propagations"] == MAX_PROPAGATION_PASSES
    assert sync.stats["reentrant_dropped"] == 1
    assert restless.set_range_calls == MAX_PROPAGATION_PASSES


def test_silent_master_still_propagates_first_pan():
    master = SilentSurface("BTC")
    replica = HeadlessChartSurface("ETH")
    sync = TimeSyncCoordinator()
    sync.attach({"BTC": master, "ETH": replica})

    assert sync.apply_initial_range(R0) is True
    assert sync.state_of("BTC") is SurfaceState.IDLE

    master.user_change_range(R1)

    assert replica.get_visible_range() == R1
    assert sync.stats["propagations"] == 2


def test_unexpected_replica_change_is_ignored():
    sync, surfaces = _overlay("BTC", "ETH")
    sync.apply_initial_range(R0)

    surfaces["ETH"].user_change_range(R2)

    assert sync.stats["unexpected_changes"] == 1
    assert surfaces["BTC"].get_visible_range() == R0


def test_degenerate_or_missing_master_range_not_propagated():
    sync, surfaces = _overlay("BTC", "ETH")
    sync.apply_initial_range(R0)

    surfaces["BTC"].user_change_range(VisibleRange(5_000, 5_000))
    surfaces["BTC"].user_change_range(None)

    assert surfaces["ETH"].get_visible_range() == R0
    assert surfaces["ETH"].set_range_calls == 1


def test_replica_already_programmatic_is_not_remarked():
    master = HeadlessChartSurface("BTC")
    silent = SilentSurface("ETH")
    sync = TimeSyncCoordinator()
    sync.attach({"BTC": master, "ETH": silent})

    master.user_change_range(R1)
    assert sync.state_of("ETH") is SurfaceState.PROGRAMMATIC_UPDATE

    master.user_change_range(R2)

    assert silent.get_visible_range() == R2
    assert silent.set_range_calls == 2
    assert sync.state_of("ETH") is SurfaceState.PROGRAMMATIC_UPDATE


def test_failing_replica_returns_to_idle_and_others_still_sync():
    master = HeadlessChartSurface("BTC")
    broken = FailingSurface("ETH")
    healthy = HeadlessChartSurface("SOL")
    sync = TimeSyncCoordinator()
    sync.attach({"BTC": master, "ETH": broken, "SOL": healthy})

    master.user_change_range(R1)

    assert sync.state_of("ETH") is SurfaceState.IDLE
    assert sync.stats["sync_errors"] == 1
    assert healthy.get_visible_range() == R1


def test_detached_replica_stops_receiving_updates():
    sync, surfaces = _overlay("BTC", "ETH", "SOL")
    sync.apply_initial_range(R0)

    sync.detach_surface("ETH")
    surfaces["BTC"].user_change_range(R1)

    assert sync.state_of("ETH") is SurfaceState.DETACHED
    assert surfaces["ETH"].subscriber_count == 0
    assert surfaces["ETH"].get_visible_range() == R0
    assert surfaces["SOL"].get_visible_range() == R1


def test_removing_master_promotes_next_surface():
    sync, surfaces = _overlay("BTC", "ETH", "SOL")
    sync.apply_initial_range(R0)

    sync.detach_surface("BTC")
    assert sync.master_symbol == "ETH"
    assert surfaces["BTC"].subscriber_count == 0

    surfaces["ETH"].user_change_range(R1)

    assert surfaces["SOL"].get_visible_range() == R1
    assert sync.stats["unexpected_changes"] == 0


def test_reattach_resets_initial_range_and_unsubscribes_old_set():
    sync, old = _overlay("BTC", "ETH")
    sync.apply_initial_range(R0)

    new = {"SOL": HeadlessChartSurface("SOL"), "XRP": HeadlessChartSurface("XRP")}
    sync.attach(new)

    assert not sync.initial_range_applied
    assert all(s.subscriber_count == 0 for s in old.values())
    assert sync.apply_initial_range(R1) is True
    assert new["XRP"].get_visible_range() == R1


def test_detach_all_clears_everything():
    sync, surfaces = _overlay("BTC", "ETH")
    sync.detach_all()

    assert sync.master_symbol is None
    assert sync.symbols == []
    assert all(s.subscriber_count == 0 for s in surfaces.values())


def test_is_attached_to_compares_surface_identity():
    sync, surfaces = _overlay("BTC", "ETH")

    assert sync.is_attached_to(surfaces)
    assert not sync.is_attached_to({"BTC": surfaces["BTC"], "ETH": HeadlessChartSurface("ETH")})
    assert not sync.is_attached_to({"ETH": surfaces["ETH"], "BTC": surfaces["BTC"]})
