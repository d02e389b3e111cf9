#   Copyright 2022 The PyMC Developers
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.


__all__ = ["MissingRequiredRole"]


class MissingRequiredRole(ValueError):
    """Raised when the outcome, exposure or mediator of a mediation DAG is not given."""

    def __init__(self, roles):
        self.roles = tuple(roles)
        super().__init__(f"Unspecified {', '.join(self.roles)}")
