import functools
import platform

from gitlab_client import _version


def get_current_version() -> str:
    return _version.__version__


@functools.lru_cache(maxsize=1)
def get_user_agent(client_name: str) -> str:
    client_version = f"{client_name}/{get_current_version()}"
    python_version = f"{platform.python_implementation()}/{platform.python_version()}"
    os_version_info = [platform.release(), platform.machine()]
    os_version_info = [s for s in os_version_info if s]  # Ignore empty strings
    operating_system = f"{platform.system()}/{'-'.join(os_version_info)}"
    return f"{client_version} {python_version} {operating_system}"
