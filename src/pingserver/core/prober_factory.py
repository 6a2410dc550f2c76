"""
Prober factory for creating reachability probe instances.
"""
import importlib
import logging
from typing import Any, Optional, Type

from pingserver.abstractions.prober import Prober
from pingserver.config.config import Config
from pingserver.core.icmp_prober import IcmpProber
from pingserver.core.subprocess_prober import SubprocessProber

logger = logging.getLogger(__name__)


def import_from_string(path: str) -> Type[Any]:
    module_name, class_name = path.rsplit(".", 1)
    module = importlib.import_module(module_name)
    return getattr(module, class_name)


class ProberFactory:
    """
    Factory class for creating prober instances.
    """

    @staticmethod
    def create_prober(prober_type: Optional[str] = None) -> Prober:
        """
        Create a prober instance based on configuration.

        Args:
            prober_type (Optional[str]): "subprocess", "icmp", or a dotted path to
                a Prober subclass. If None, uses Config.PROBER_CLASS.

        Returns:
            Prober: A prober instance.

        Raises:
            ValueError: If the type is unknown or does not name a Prober class.
        """
        prober_type = prober_type or Config.PROBER_CLASS
        logger.info(f"Creating {prober_type} prober")

        if prober_type.lower() == "subprocess":
            return SubprocessProber(
                ping_binary=Config.PING_BINARY, count=Config.PING_COUNT
            )

        if prober_type.lower() == "icmp":
            return IcmpProber()

        if "." not in prober_type:
            supported_types = ["subprocess", "icmp"]
            raise ValueError(
                f"Unsupported prober type: {prober_type}. "
                f"Supported types: {supported_types} or a dotted class path"
            )

        try:
            prober_cls = import_from_string(prober_type)
        except (ImportError, AttributeError) as e:
            logger.error(f"Could not import prober class '{prober_type}': {e}")
            raise ValueError(f"Could not import prober class '{prober_type}': {e}")
        if not (isinstance(prober_cls, type) and issubclass(prober_cls, Prober)):
            raise ValueError(f"{prober_type} is not a Prober subclass")
        return prober_cls()


def get_default_prober() -> Prober:
    """
    Get the default prober instance based on current configuration.
    """
    return ProberFactory.create_prober()
