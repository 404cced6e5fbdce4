"""Builder producing ready-to-use service objects.

Creating a service needs some setup that callers should not have to repeat:
resolving options, authenticating against the identity service, pointing an
HTTP client at the service's endpoint and attaching the auth middleware.
:class:`Builder` does all of it::

    builder = Builder({"authUrl": auth_url, "identityService": identity, "user": {...}})
    compute = builder.create_service("compute.v2", region="RegionOne", catalogType="compute")
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, Mapping

import httpx

from opencloud.common.auth import IdentityService, Token
from opencloud.common.error import ClassResolutionError, ConfigurationError
from opencloud.common.transport import HandlerStack, auth_handler, log, normalize_url
from opencloud.config import merge_options
from opencloud.infrastructure.observability import get_logger, log_context, trace_span

logger = get_logger(__name__)

# Options passed straight through to the httpx clients
_CLIENT_OPTIONS = ("timeout", "verify", "headers")


class Builder:
    """Create services from layered options.

    Args:
        global_options: Options applied to every service this builder
            creates. Per-service options passed to :meth:`create_service`
            override them.
        root_package: Package under which service namespaces are resolved.
    """

    defaults: dict[str, Any] = {"urlType": "publicURL"}

    def __init__(
        self,
        global_options: Mapping[str, Any] | None = None,
        root_package: str = "opencloud",
    ) -> None:
        self.global_options = dict(global_options or {})
        self.root_package = root_package

    def __repr__(self) -> str:
        return f"Builder(root_package={self.root_package!r})"

    # -------------------- public API --------------------
    def create_service(self, namespace: str, **service_options: Any) -> Any:
        """Return a fully configured service.

        Args:
            namespace: Dotted service namespace relative to the root package,
                e.g. ``"compute.v2"``. The module must expose ``Api`` and
                ``Service`` classes.
            **service_options: Options for this service only.

        Raises:
            ConfigurationError: If ``authUrl`` or a valid ``identityService``
                is missing.
            ClassResolutionError: If the namespace cannot be resolved.
        """
        with log_context(service=namespace), trace_span("builder.create_service", namespace=namespace):
            options = self.merge_options(service_options)
            api_cls, service_cls = self.get_classes(namespace)

            self._stock_auth_handler(options)
            self._stock_http_client(options, namespace)

            logger.debug("Created service %s at %s", namespace, options["httpClient"].base_url)
            return service_cls(options["httpClient"], api_cls(), options.get("asyncHttpClient"))

    def merge_options(self, service_options: Mapping[str, Any]) -> dict[str, Any]:
        """Layer defaults, global options and ``service_options``, in that order.

        Raises:
            ConfigurationError: If required options are missing.
        """
        options = merge_options(self.defaults, self.global_options, service_options)

        if not options.get("authUrl"):
            raise ConfigurationError('"authUrl" is a required option')

        if not isinstance(options.get("identityService"), IdentityService):
            raise ConfigurationError(
                '"identityService" must be specified and implement '
                f"{IdentityService.__module__}.{IdentityService.__qualname__}"
            )

        return options

    def get_classes(self, namespace: str) -> tuple[type, type]:
        """Resolve the ``Api`` and ``Service`` classes of ``namespace``.

        Raises:
            ClassResolutionError: If the module or either class is missing.
        """
        module_name = f"{self.root_package}.{namespace}"
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            missing = exc.name or ""
            if not (module_name == missing or module_name.startswith(missing + ".")):
                raise
            raise ClassResolutionError(f"{module_name} does not exist") from exc

        classes = []
        for attr in ("Api", "Service"):
            cls = getattr(module, attr, None)
            if not isinstance(cls, type):
                raise ClassResolutionError(f"{module_name}.{attr} does not exist")
            classes.append(cls)
        return classes[0], classes[1]

    # -------------------- option stocking --------------------
    def _stock_auth_handler(self, options: dict[str, Any]) -> None:
        if "authHandler" not in options:
            identity: IdentityService = options["identityService"]
            snapshot = dict(options)

            def generate_token() -> Token:
                return identity.authenticate(snapshot)[0]

            options["authHandler"] = generate_token

    def _stock_http_client(self, options: dict[str, Any], namespace: str) -> None:
        if isinstance(options.get("httpClient"), httpx.Client):
            return

        if "identity" in namespace.lower():
            base_url = options["authUrl"]
            stack = self._get_stack(options["authHandler"])
        else:
            token, base_url = options["identityService"].authenticate(options)
            stack = self._get_stack(options["authHandler"], token)

        self._add_debug_middleware(options, stack)

        options["httpClient"] = self._http_client(base_url, stack, options)
        if not isinstance(options.get("asyncHttpClient"), httpx.AsyncClient):
            options["asyncHttpClient"] = self._async_http_client(base_url, stack, options)

    def _add_debug_middleware(self, options: Mapping[str, Any], stack: HandlerStack) -> None:
        if options.get("debugLog") and options.get("logger") and options.get("messageFormatter"):
            stack.push(
                log(options["logger"], options["messageFormatter"], options.get("logLevel", logging.INFO)),
                "logger",
            )

    def _get_stack(self, token_generator: Any, token: Token | None = None) -> HandlerStack:
        stack = HandlerStack.create()
        stack.push(auth_handler(token_generator, token), "auth_handler")
        return stack

    def _client_kwargs(self, base_url: str, options: Mapping[str, Any]) -> dict[str, Any]:
        from opencloud import __version__

        kwargs = {name: options[name] for name in _CLIENT_OPTIONS if name in options}
        kwargs["headers"] = {"User-Agent": f"opencloud/{__version__}", **kwargs.get("headers", {})}
        kwargs["base_url"] = normalize_url(base_url)
        return kwargs

    def _http_client(self, base_url: str, stack: HandlerStack, options: Mapping[str, Any]) -> httpx.Client:
        return httpx.Client(
            event_hooks=stack.event_hooks(),
            transport=options.get("transport"),
            **self._client_kwargs(base_url, options),
        )

    def _async_http_client(
        self, base_url: str, stack: HandlerStack, options: Mapping[str, Any]
    ) -> httpx.AsyncClient:
        transport = options.get("asyncTransport")
        if transport is None and isinstance(options.get("transport"), httpx.AsyncBaseTransport):
            transport = options["transport"]
        return httpx.AsyncClient(
            event_hooks=stack.async_event_hooks(),
            transport=transport,
            **self._client_kwargs(base_url, options),
        )


__all__ = ["Builder"]
