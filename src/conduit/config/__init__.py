# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit

from conduit.config.settings import DEFAULT_SCHEDULE_HORIZON_MINUTES, ConduitSettings

__all__ = ["ConduitSettings", "DEFAULT_SCHEDULE_HORIZON_MINUTES"]
