from dataclasses import dataclass
from typing import Tuple

MATURITY_ALPHA = 50
MATURITY_BETA = 100
MATURITY_RC = 150
MATURITY_STABLE = 200


@dataclass(frozen=True)
class PluginInfo:
    component: str
    release: str
    version: int
    requires: int
    supported: Tuple[int, ...]
    maturity: int

    def is_supported(self, host_branch):
        return host_branch in self.supported

    def meets_requirements(self, host_version):
        return host_version >= self.requires


plugin = PluginInfo(
    component="assignsubmission_automark",
    release="1.0",
    version=2024031700,
    requires=2023100900,
    supported=(403, 404),
    maturity=MATURITY_STABLE,
)
