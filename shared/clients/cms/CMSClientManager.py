from shared.helper.HelperConfig import HelperConfig
from shared.clients.cms.CMSClientInterface import CMSClientInterface


class CMSClientManager:
    """
    Manager class to instantiate the configured CMS client.
    """

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self.client = self._initialize_client()

    def _get_engine_from_env(self) -> str:
        """
        Reads the CMS engine from ENV configuration.

        Returns:
            str: The engine name, capitalized. E.g. "Strapi"
        """
        engine = self.helper_config.get_string_val("CMS_ENGINE", default="strapi")
        return engine.strip().lower().capitalize()

    def _initialize_client(self) -> CMSClientInterface:
        """
        Instantiates the client of the configured engine from shared.clients.cms.{engine}.CMSClient{Engine}.

        Returns:
            CMSClientInterface: The client instance.

        Raises:
            ValueError: If the engine is not supported.
        """
        engine = self._get_engine_from_env()
        class_name = f"CMSClient{engine}"
        try:
            module = __import__(
                f"shared.clients.cms.{engine.lower()}.{class_name}",
                fromlist=[class_name],
            )
            client_class = getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"Unsupported CMS engine specified: '{engine}'. Error: {e}")
        client = client_class(helper_config=self.helper_config)
        self.logging.debug(f"Instantiated CMS client for engine: {engine}")
        return client

    def get_client(self) -> CMSClientInterface:
        """
        Returns the instantiated CMS client.

        Returns:
            CMSClientInterface: The CMS client instance.
        """
        return self.client
