from rxquant.config.settings import Settings
from rxquant.directory.base import BaseDrugNormalizer, BasePackageDirectory
from rxquant.directory.example_adapter import ExampleDrugNormalizer, ExamplePackageDirectory
from rxquant.directory.fda_client_adapter import FdaClientAdapter
from rxquant.directory.rxnorm_client_adapter import RxNormClientAdapter


class DirectoryFactory:
    """Creates the configured drug normalizer and package directory."""

    SUPPORTED_PROVIDERS = ("example", "live")

    @classmethod
    def create(cls, settings: Settings) -> tuple[BaseDrugNormalizer, BasePackageDirectory]:
        """Create the directory adapters from application settings."""
        provider = settings.directory_provider.strip().lower()
        if provider == "example":
            return (
                ExampleDrugNormalizer(),
                ExamplePackageDirectory(include_inactive=settings.include_inactive_packages),
            )
        if provider == "live":
            normalizer = RxNormClientAdapter(
                base_url=settings.rxnorm_api_base_url,
                timeout_seconds=settings.directory_timeout_seconds,
            )
            directory = FdaClientAdapter(
                base_url=settings.fda_api_base_url,
                timeout_seconds=settings.directory_timeout_seconds,
                result_limit=settings.fda_result_limit,
                include_inactive=settings.include_inactive_packages,
            )
            return normalizer, directory
        raise ValueError(
            f"Unknown directory provider '{provider}'. "
            f"Choose from: {list(cls.SUPPORTED_PROVIDERS)}"
        )
