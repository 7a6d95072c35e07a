"""
Handler results and the dispatcher that renders them.

Every route handler returns Ok or Err instead of building a response.
render_result() is the only place that turns a result into a page or a
redirect, so error presentation is uniform across routes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from flask import redirect, render_template, url_for

from reviewsite.context import RequestContext


class ErrorKind(Enum):
    VALIDATION = 'validation'
    AUTHENTICATION = 'authentication'
    AUTHORIZATION = 'authorization'
    DUPLICATE = 'duplicate'
    NOT_FOUND = 'not_found'
    STORE = 'store'


@dataclass(frozen=True)
class Ok:
    """A rendered page, or a redirect when redirect_to names an endpoint."""

    template: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    redirect_to: Optional[str] = None

    @classmethod
    def page(cls, template: str, **context) -> 'Ok':
        return cls(template=template, context=context)

    @classmethod
    def redirect(cls, endpoint: str) -> 'Ok':
        return cls(redirect_to=endpoint)


@dataclass(frozen=True)
class Err:
    """
    A failed request.

    template/context describe the page to re-render with the message;
    AUTHORIZATION errors ignore them and redirect to the login page.
    """

    kind: ErrorKind
    message: str
    template: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)


def render_result(result, ctx: RequestContext):
    """Convert a handler result into a Flask response."""
    if isinstance(result, Ok):
        if result.redirect_to is not None:
            return redirect(url_for(result.redirect_to))
        return render_template(result.template, viewer=ctx.user, **result.context)

    if result.kind is ErrorKind.AUTHORIZATION:
        return redirect(url_for('auth.login'))

    return render_template(
        result.template,
        viewer=ctx.user,
        error=result.message,
        **result.context,
    ), 200
