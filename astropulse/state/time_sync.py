"""
AstroPulse – Multi-Surface Time Sync
======================================
Mantiene idéntico el rango visible de varias superficies de gráfico en
modo overlay (una por símbolo) sin bucles de actualización.

ARQUITECTURA:
  ┌────────┐ rango  ┌──────────────┐ set_visible_range ┌───────────┐
  │ Master │──────▸│ Coordinator  │──────────────────▸│ Réplica N │
  └────────┘        └──────────────┘◂───── eco ───────└───────────┘

- UNA superficie es master (la primera del set de símbolos). Solo ella
  tiene interacción de usuario habilitada.
- Cambio genuino en master → cada réplica IDLE pasa a PROGRAMMATIC_UPDATE
  y recibe el rango. El eco de la réplica limpia su estado y NO re-propaga.
- Una réplica ya en PROGRAMMATIC_UPDATE recibe el rango sin re-marcarse:
  el estado es de un solo disparo por cambio propagado.
- El master nunca se marca PROGRAMMATIC_UPDATE. Su rango inicial se fija
  con el handler del master silenciado, así un widget que no emite eco no
  deja al master esperando uno.
- Un cambio del master que llega durante una propagación queda pendiente y
  se propaga al terminar la pasada en curso (máximo MAX_PROPAGATION_PASSES).
- Cambios en réplicas IDLE son inesperados (pinch-zoom nativo): se
  cuentan y se ignoran.

CÓMO SE EVITAN ESTADOS COLGADOS:
  Si la superficie ya muestra el rango pedido no se llama a
  set_visible_range (el widget no emitiría eco y el estado quedaría en
  PROGRAMMATIC_UPDATE tragándose el siguiente cambio real).

THREADING:
  Todo es síncrono y corre en el hilo del motor. La re-entrada se corta
  por estado, no por throttling.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Dict, Mapping, Optional

from astropulse.application.ports.chart_surface import IChartSurface, Unsubscribe
from astropulse.domain.value_objects.surface_state import SurfaceState
from astropulse.domain.value_objects.visible_range import VisibleRange
from astropulse.shared.logging.logger import get_logger

logger = get_logger("time_sync")

MAX_PROPAGATION_PASSES = 4


@dataclass
class _SurfaceSlot:
    """Superficie registrada y su estado de sincronización."""

    symbol: str
    surface: IChartSurface
    state: SurfaceState = SurfaceState.IDLE
    unsubscribe: Optional[Unsubscribe] = None


class TimeSyncCoordinator:
    """
    Coordinador de rango visible entre superficies overlay.

    Uso:
        sync = TimeSyncCoordinator()
        sync.attach({"BTCUSDT": chart_a, "ETHUSDT": chart_b})
        sync.apply_initial_range(VisibleRange(from_, to))
    """

    def __init__(self) -> None:
        self._slots: Dict[str, _SurfaceSlot] = {}
        self._master: Optional[str] = None
        self._propagating = False
        self._muting_master = False
        self._pending_range: Optional[VisibleRange] = None
        self._initial_range_applied = False

        # Contadores de monitoreo
        self._propagations = 0
        self._echoes_suppressed = 0
        self._unexpected_changes = 0
        self._reentrant_deferred = 0
        self._reentrant_dropped = 0
        self._sync_errors = 0

    # ════════════════════════════════════════════════════════════════
    #  CICLO DE VIDA
    # ════════════════════════════════════════════════════════════════

    def attach(self, surfaces: Mapping[str, IChartSurface]) -> None:
        """
        Registrar un nuevo set de símbolos. El primero es el master.

        Desregistra el set anterior y rearma initial_range_applied.
        """
        self.detach_all()
        for symbol, surface in surfaces.items():
            self._slots[symbol] = _SurfaceSlot(symbol=symbol, surface=surface)
        self._initial_range_applied = False

        if not self._slots:
            return

        symbols = list(self._slots)
        self._set_master(symbols[0])
        for symbol in symbols[1:]:
            self._subscribe_replica(self._slots[symbol])

        logger.info(
            "TimeSync: master='%s' réplicas=%s",
            self._master, ", ".join(symbols[1:]) or "-",
        )

    def detach_surface(self, symbol: str) -> None:
        """
        Retirar una superficie (puede ocurrir a mitad de propagación).

        Si era el master, se promueve la siguiente superficie registrada.
        """
        slot = self._slots.pop(symbol, None)
        if slot is None:
            return
        self._release(slot)

        if symbol == self._master:
            self._master = None
            if self._slots:
                self._set_master(next(iter(self._slots)))
                logger.info("TimeSync: master '%s' retirado, promovido '%s'", symbol, self._master)

    def detach_all(self) -> None:
        """Teardown: desuscribir todas las superficies."""
        for slot in list(self._slots.values()):
            self._release(slot)
        self._slots.clear()
        self._master = None

    # ════════════════════════════════════════════════════════════════
    #  RANGO INICIAL
    # ════════════════════════════════════════════════════════════════

    def apply_initial_range(self, visible_range: VisibleRange) -> bool:
        """
        Fijar el rango inicial en el master y réplicas, UNA vez por attach().

        Returns: True si se aplicó, False si ya estaba aplicado o no hay master.
        """
        if self._initial_range_applied:
            return False
        master = self._master_slot()
        if master is None or visible_range.is_degenerate:
            return False

        if not self._apply_to_master(master, visible_range):
            return False

        self._initial_range_applied = True
        self._propagate(visible_range)
        return True

    # ════════════════════════════════════════════════════════════════
    #  HANDLERS DE CAMBIO DE RANGO
    # ════════════════════════════════════════════════════════════════

    def _on_master_range_change(self, visible_range: Optional[VisibleRange]) -> None:
        master = self._master_slot()
        if master is None:
            return

        if self._muting_master:
            self._echoes_suppressed += 1
            return

        if visible_range is None or visible_range.is_degenerate:
            return

        if self._propagating:
            # Se propaga al terminar la pasada en curso
            self._pending_range = visible_range
            self._reentrant_deferred += 1
            logger.debug("TimeSync: cambio re-entrante del master diferido")
            return

        self._propagate(visible_range)

    def _on_replica_range_change(self, symbol: str, visible_range: Optional[VisibleRange]) -> None:
        slot = self._slots.get(symbol)
        if slot is None or slot.state is SurfaceState.DETACHED:
            return

        if slot.state is SurfaceState.PROGRAMMATIC_UPDATE:
            # Eco de nuestro propio set_visible_range → no re-propagar
            slot.state = SurfaceState.IDLE
            self._echoes_suppressed += 1
            return

        self._unexpected_changes += 1
        logger.debug("TimeSync: cambio de rango inesperado en réplica '%s' ignorado", symbol)

    # ════════════════════════════════════════════════════════════════
    #  INTERNOS
    # ════════════════════════════════════════════════════════════════

    def _propagate(self, visible_range: VisibleRange) -> None:
        self._propagating = True
        target: Optional[VisibleRange] = visible_range
        try:
            passes = 0
            while target is not None and passes < MAX_PROPAGATION_PASSES:
                self._pending_range = None
                for slot in list(self._slots.values()):
                    if slot.symbol == self._master:
                        continue
                    self._push_range(slot, target)
                self._propagations += 1
                passes += 1
                target = self._pending_range

            if target is not None:
                self._reentrant_dropped += 1
                logger.warning(
                    "TimeSync: el master siguió moviéndose tras %d pasadas, rango %s descartado",
                    passes, target,
                )
        finally:
            self._propagating = False
            self._pending_range = None

    def _apply_to_master(self, master: _SurfaceSlot, visible_range: VisibleRange) -> bool:
        """Fijar el rango del master sin marcarlo; su eco síncrono se ignora."""
        if master.surface.get_visible_range() == visible_range:
            return True
        self._muting_master = True
        try:
            master.surface.set_visible_range(visible_range)
        except Exception:
            self._sync_errors += 1
            logger.warning(
                "TimeSync: error fijando rango inicial en master '%s'", master.symbol, exc_info=True,
            )
            return False
        finally:
            self._muting_master = False
        return True

    def _push_range(self, slot: _SurfaceSlot, visible_range: VisibleRange) -> bool:
        """Marcar la réplica como programática y fijar su rango."""
        if slot.state is SurfaceState.DETACHED:
            return False
        if slot.surface.get_visible_range() == visible_range:
            return True

        if slot.state is SurfaceState.IDLE:
            slot.state = SurfaceState.PROGRAMMATIC_UPDATE
        try:
            slot.surface.set_visible_range(visible_range)
        except Exception:
            self._sync_errors += 1
            logger.warning(
                "TimeSync: error fijando rango en '%s'", slot.symbol, exc_info=True,
            )
            if slot.state is SurfaceState.PROGRAMMATIC_UPDATE:
                slot.state = SurfaceState.IDLE
            return False
        return True

    def _set_master(self, symbol: str) -> None:
        slot = self._slots[symbol]
        if slot.unsubscribe is not None:
            slot.unsubscribe()
        slot.state = SurfaceState.IDLE
        slot.unsubscribe = slot.surface.subscribe_visible_range_change(self._on_master_range_change)
        self._master = symbol

    def _subscribe_replica(self, slot: _SurfaceSlot) -> None:
        slot.unsubscribe = slot.surface.subscribe_visible_range_change(
            partial(self._on_replica_range_change, slot.symbol)
        )

    def _release(self, slot: _SurfaceSlot) -> None:
        slot.state = SurfaceState.DETACHED
        if slot.unsubscribe is not None:
            slot.unsubscribe()
            slot.unsubscribe = None

    def _master_slot(self) -> Optional[_SurfaceSlot]:
        if self._master is None:
            return None
        slot = self._slots.get(self._master)
        if slot is None or slot.state is SurfaceState.DETACHED:
            return None
        return slot

    # ════════════════════════════════════════════════════════════════
    #  CONSULTAS
    # ════════════════════════════════════════════════════════════════

    @property
    def master_symbol(self) -> Optional[str]:
        return self._master

    @property
    def initial_range_applied(self) -> bool:
        return self._initial_range_applied

    @property
    def symbols(self) -> list[str]:
        return list(self._slots)

    def is_attached_to(self, surfaces: Mapping[str, IChartSurface]) -> bool:
        """True si `surfaces` es el set registrado: mismos símbolos, orden y objetos."""
        if list(surfaces) != list(self._slots):
            return False
        return all(self._slots[symbol].surface is surface for symbol, surface in surfaces.items())

    def state_of(self, symbol: str) -> SurfaceState:
        slot = self._slots.get(symbol)
        return slot.state if slot is not None else SurfaceState.DETACHED

    @property
    def stats(self) -> dict:
        return {
            "master": self._master,
            "surfaces": len(self._slots),
            "initial_range_applied": self._initial_range_applied,
            "propagations": self._propagations,
            "echoes_suppressed": self._echoes_suppressed,
            "unexpected_changes": self._unexpected_changes,
            "reentrant_deferred": self._reentrant_deferred,
            "reentrant_dropped": self._reentrant_dropped,
            "sync_errors": self._sync_errors,
        }
