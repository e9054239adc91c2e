from rxquant.directory.base import BaseDrugNormalizer, BasePackageDirectory
from rxquant.directory.example_adapter import ExampleDrugNormalizer, ExamplePackageDirectory
from rxquant.directory.factory import DirectoryFactory
from rxquant.directory.fda_client_adapter import FdaClientAdapter
from rxquant.directory.rxnorm_client_adapter import RxNormClientAdapter

__all__ = [
    "BaseDrugNormalizer",
    "BasePackageDirectory",
    "DirectoryFactory",
    "ExampleDrugNormalizer",
    "ExamplePackageDirectory",
    "FdaClientAdapter",
    "RxNormClientAdapter",
]
