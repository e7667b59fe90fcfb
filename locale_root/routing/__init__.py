from .decision import (
    BootstrapRedirect,
    NotFound,
    Redirect,
    RequestContext,
    RootRouter,
    RoutingDecision,
    ServeContent,
    should_be_on_root,
)

__all__ = [
    "BootstrapRedirect",
    "NotFound",
    "Redirect",
    "RequestContext",
    "RootRouter",
    "RoutingDecision",
    "ServeContent",
    "should_be_on_root",
]
