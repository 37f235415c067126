"""Contract interface descriptor and the pool master contract wrapper"""

from .descriptor import ContractDescriptor, ContractFunction, Param
from .pool_master import PoolMaster

__all__ = ["ContractDescriptor", "ContractFunction", "Param", "PoolMaster"]
