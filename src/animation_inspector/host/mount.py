"""Install the overlay into a host document."""

from __future__ import annotations

from typing import Optional

from ..clipboard import ClipboardSink
from ..config import InspectorConfig, default_config
from ..exceptions import DuplicateMountError
from ..logging_config import get_logger
from ..session.controller import SessionController
from .protocols import HostEnvironment

logger = get_logger(__name__)


def mount_overlay(
    host: HostEnvironment,
    config: Optional[InspectorConfig] = None,
    clipboard: Optional[ClipboardSink] = None,
    element_id: Optional[str] = None,
) -> SessionController:
    """Create the overlay's host element and a controller bound to it.

    Raises:
        DuplicateMountError: If an element with the mount id already exists.
    """
    config = config or default_config
    element_id = element_id or config.host_element_id
    if host.has_element(element_id):
        raise DuplicateMountError(element_id)

    controller = SessionController(host, config=config, clipboard=clipboard)
    controller.mount_node = host.create_element(element_id)
    logger.debug("Mounted inspector overlay into #%s", element_id)
    return controller
