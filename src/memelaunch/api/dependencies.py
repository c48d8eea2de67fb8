"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Header

from memelaunch.config.settings import Settings, get_settings
from memelaunch.core.launchpad import Launchpad, get_launchpad

SettingsDep = Annotated[Settings, Depends(get_settings)]
LaunchpadDep = Annotated[Launchpad, Depends(get_launchpad)]

# Identity is asserted by the gateway in front of the API
CallerDep = Annotated[str, Header(alias="X-Caller", min_length=1)]
