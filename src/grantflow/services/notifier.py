"""
Delivery of the flow outcome to the dependent remote-control server.
"""

import logging
import os
import subprocess
import sys
from typing import Callable, Dict, Optional

from ..config.settings import ConfigStore
from ..errors import ServiceStartError
from ..schemas.flow import OutcomeNotification
from .flow.protocol import DependentService

logger = logging.getLogger(__name__)

ENV_ACTION = "GRANTFLOW_ACTION"
ENV_INPUT_RESULT = "GRANTFLOW_INPUT_RESULT"
ENV_ACCESS_KEY = "GRANTFLOW_ACCESS_KEY"


def notification_env(notification: OutcomeNotification) -> Dict[str, str]:
    """Environment variables carrying a notification to the server process."""
    return {
        ENV_ACTION: notification.action,
        ENV_INPUT_RESULT: "true" if notification.outcome.granted else "false",
        ENV_ACCESS_KEY: notification.access_key,
    }


class ProcessServiceNotifier(DependentService):
    """
    Starts the server command detached from this process and hands it the
    outcome through its environment.
    """

    def __init__(self, config: ConfigStore):
        self.config = config

    def _popen_kwargs(self) -> Dict:
        if sys.platform == "win32":
            flags = subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
            return {"creationflags": flags}
        return {"start_new_session": True}

    def notify(self, notification: OutcomeNotification) -> None:
        """
        Start the server with the outcome.

        Raises:
            ServiceStartError: If the server command cannot be started
        """
        command = self.config.get_service_command()
        env = dict(os.environ)
        env.update(notification_env(notification))

        try:
            subprocess.Popen(
                command,
                env=env,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                **self._popen_kwargs(),
            )
        except OSError as e:
            raise ServiceStartError(f"Cannot start {command[0]}: {e}") from e

        logger.debug(
            "Started %s with input result %s", command[0], notification.outcome.granted
        )


class CallbackServiceNotifier(DependentService):
    """Hands the outcome to an in-process callback."""

    def __init__(self, callback: Callable[[OutcomeNotification], None]):
        self.callback = callback
        self.last: Optional[OutcomeNotification] = None

    def notify(self, notification: OutcomeNotification) -> None:
        self.last = notification
        self.callback(notification)
