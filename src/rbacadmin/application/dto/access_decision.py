"""Access decision DTO."""

from dataclasses import dataclass, field

from rbacadmin.domain.value_objects import DenialReason, GateState


@dataclass(frozen=True)
class AccessDecision:
    """Gate outcome for one view or menu entry."""

    state: GateState
    reason: DenialReason | None = None
    missing: tuple[str, ...] = field(default_factory=tuple)
    redirect_to: str | None = None

    @property
    def granted(self) -> bool:
        return self.state is GateState.GRANTED
