"""Warble: declarative, attribute-driven client-side routing.

Components declare the path they answer to; warble works out which of
them match the current location, flags them active, runs their
lifecycle hooks, and activates a fallback when nothing matches.

Basic usage::

    from warble import Router

    router = Router(window)

    class PageUser(Element):
        page_path = "/users/:id"

        async def router_callback(self, params, event):
            self.user_id = params["id"]

    await router.register(PageUser())

Headless (tests, prerendering)::

    from warble.testing import Browser

    browser = Browser("http://localhost/users/42")
    router = Router(browser.window)
"""

__version__ = "0.1.0"
__all__ = [
    "ActivationEngine",
    "ActivationState",
    "ComponentResolver",
    "ConfigurationError",
    "ElementResolver",
    "GroupRegistry",
    "HostError",
    "InterceptorHandle",
    "Location",
    "NavigationInterceptor",
    "ReconciliationQueue",
    "RouteGroup",
    "Router",
    "RoutingConfig",
    "WarbleError",
    "emit_popstate",
    "get_router",
    "match",
    "parse_template",
]

# name -> module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "ActivationEngine": "warble.engine",
    "ActivationState": "warble.engine",
    "ComponentResolver": "warble.binding",
    "ConfigurationError": "warble.errors",
    "ElementResolver": "warble.binding",
    "GroupRegistry": "warble.registry",
    "HostError": "warble.errors",
    "InterceptorHandle": "warble.interceptor",
    "Location": "warble.routing.location",
    "NavigationInterceptor": "warble.interceptor",
    "ReconciliationQueue": "warble.queue",
    "RouteGroup": "warble.registry",
    "Router": "warble.router",
    "RoutingConfig": "warble.config",
    "WarbleError": "warble.errors",
    "emit_popstate": "warble.interceptor",
    "get_router": "warble.context",
    "match": "warble.routing.matcher",
    "parse_template": "warble.routing.template",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import warble`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    from importlib import import_module

    return getattr(import_module(module_name), name)
