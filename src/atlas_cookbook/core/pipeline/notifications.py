# src/atlas_cookbook/core/pipeline/notifications.py
"""
Registro de notificações pendentes de uma run.

Uma notificação é a intenção registrada de que a mudança de estado de
um resource dispare uma ação em outro resource. Este módulo apenas
registra e consulta notificações; o momento de entrega pertence ao
motor de convergência, fora do Atlas Cookbook.

Decisões arquiteturais:
    - Dois níveis independentes: imediato e tardio (delayed)
    - A chave é a identidade do resource notificador: o `name` declarado
      quando é uma instância de `Resource`, senão sua forma textual
    - Consultar uma identidade sem notificações retorna lista vazia
      e não cria entrada

Invariantes:
    - A ordem de inserção é a ordem de disparo
    - Registros em um nível nunca aparecem no outro
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass
class Resource:
    """Resource declarado em uma recipe (identidade mínima para notificações)."""

    name: str
    resource_type: str = "resource"

    def __str__(self) -> str:
        return f"{self.resource_type}[{self.name}]"


@dataclass(frozen=True)
class Notification:
    """
    Notificação pendente.

    Campos:
        - resource: resource que receberá a ação
        - action: ação a executar no resource notificado
        - notifying_resource: resource cuja mudança dispara a notificação
    """
    resource: Any
    action: str
    notifying_resource: Any


def resource_identity(resource: Any) -> str:
    if isinstance(resource, Resource):
        return resource.name
    return str(resource)


class NotificationRegistry:
    """Notificações imediatas e tardias indexadas pela identidade do notificador."""

    def __init__(self) -> None:
        self._immediate: Dict[str, List[Notification]] = {}
        self._delayed: Dict[str, List[Notification]] = {}

    @staticmethod
    def _record(tier: Dict[str, List[Notification]], notification: Notification) -> None:
        key = resource_identity(notification.notifying_resource)
        tier.setdefault(key, []).append(notification)

    def record_immediate(self, notification: Notification) -> None:
        self._record(self._immediate, notification)

    def record_delayed(self, notification: Notification) -> None:
        self._record(self._delayed, notification)

    def immediate_for(self, resource: Any) -> List[Notification]:
        return list(self._immediate.get(resource_identity(resource), ()))

    def delayed_for(self, resource: Any) -> List[Notification]:
        return list(self._delayed.get(resource_identity(resource), ()))

    @property
    def immediate(self) -> Dict[str, List[Notification]]:
        return {k: list(v) for k, v in self._immediate.items()}

    @property
    def delayed(self) -> Dict[str, List[Notification]]:
        return {k: list(v) for k, v in self._delayed.items()}
