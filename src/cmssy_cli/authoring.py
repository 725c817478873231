"""Declaration helpers used in ``block_config.py`` files.

A resource declares its config with a single call::

    from cmssy_cli.authoring import define_block

    config = define_block(
        name='Hero',
        description='Full-width hero section',
        category='marketing',
        tags=['hero'],
        schema={
            'title': {'type': 'singleLine', 'label': 'Title', 'required': True},
        },
    )

The CLI never imports these files. It reads the call's literal arguments
(see ``cmssy_cli.discovery.loader``), so every argument must be a literal.
"""

from __future__ import annotations

from typing import Any

from cmssy_cli.models.resource import BlockConfig, TemplateConfig


def define_block(**config: Any) -> BlockConfig:
    return BlockConfig.model_validate(config)


def define_template(**config: Any) -> TemplateConfig:
    return TemplateConfig.model_validate(config)
