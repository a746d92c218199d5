"""
Settings model — defaults loaded from pageshift.yml.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Settings(BaseModel):
    """Tool configuration.

    Attributes:
        shared:        Give page functions the shared model by default.
        request:       Give page functions the request by default.
        placeholder:   Text shown by a freshly generated view.
        pages_prefix:  Prefix stripped from a page's module name.
        params_prefix: Module prefix of the generated route params.
    """

    model_config = ConfigDict(extra="forbid")

    shared: bool = False
    request: bool = False
    placeholder: str = "Hello World"
    pages_prefix: str = "Pages."
    params_prefix: str = "Gen.Params."

    def params_module(self, page_module: str) -> str:
        """Route-params module for a page (``Pages.Home_`` → ``Gen.Params.Home_``)."""
        return self.params_prefix + page_module.removeprefix(self.pages_prefix)
