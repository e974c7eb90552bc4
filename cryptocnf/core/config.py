import dataclasses
import json
import os

from cryptocnf.core.logging import get_logger

logger = get_logger("cryptocnf.core")

DEFAULT_SOLVER = "minisat22"

def _truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")

@dataclasses.dataclass
class CnfConfig:
    solver: str = DEFAULT_SOLVER
    dimacs_header: bool = False

    @staticmethod
    def from_env_or_file() -> 'CnfConfig':
        # 1. Try Env Vars
        env_solver = os.environ.get("CRYPTOCNF_SOLVER")
        env_header = os.environ.get("CRYPTOCNF_DIMACS_HEADER")
        if env_solver or env_header:
            return CnfConfig(
                solver=env_solver or DEFAULT_SOLVER,
                dimacs_header=_truthy(env_header) if env_header else False,
            )

        # 2. Try Config Path
        config_path = os.environ.get("CRYPTOCNF_CONFIG_PATH")
        if config_path and os.path.exists(config_path):
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Ignoring unreadable config file {config_path}: {e}")
            else:
                header = data.get("dimacs_header", False)
                if isinstance(header, str):
                    header = _truthy(header)
                return CnfConfig(
                    solver=data.get("solver", DEFAULT_SOLVER),
                    dimacs_header=bool(header),
                )

        # Default
        return CnfConfig()
