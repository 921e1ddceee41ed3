"""Target resolution: which dataplane instances does a command apply to."""

from __future__ import annotations

import logging
from typing import List, Sequence, TYPE_CHECKING

from .models import Target

if TYPE_CHECKING:  # pragma: no cover
    from dscp_gateway import DscpGateway

LOG = logging.getLogger(__name__)


async def resolve_instances(
    gateway: "DscpGateway", explicit: Sequence[int]
) -> List[int]:
    """Return the instances a command should be fanned out to.

    A non-empty ``explicit`` list is returned as given, duplicates and order
    included.  An empty list means "every instance the service knows about",
    which costs one ``ListConfigs`` call.
    """

    if explicit:
        return list(explicit)

    summary = await gateway.list_configs()
    instances = [entry.instance for entry in summary]
    LOG.debug("discovered dataplane instances: %s", instances)
    return instances


def build_targets(config_name: str, instances: Sequence[int]) -> List[Target]:
    return [Target(config_name=config_name, instance=instance) for instance in instances]
