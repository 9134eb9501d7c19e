"""Application services: tags, path expansion, batch reads, parsing, warmup."""

from tresor.application.services.batch_reader import resolve_batch, resolve_template
from tresor.application.services.cache_warmup import retry_storage, warm_with_retry
from tresor.application.services.path_expander import expand
from tresor.application.services.request_parser import (
    RequestSpec,
    parse_path_templates,
    parse_request_data,
)
from tresor.application.services.tag_service import (
    HashAlgorithm,
    SHA1Algorithm,
    SHA256Algorithm,
    TagService,
    derive_tag,
)

__all__ = [
    "HashAlgorithm",
    "RequestSpec",
    "SHA1Algorithm",
    "SHA256Algorithm",
    "TagService",
    "derive_tag",
    "expand",
    "parse_path_templates",
    "parse_request_data",
    "resolve_batch",
    "resolve_template",
    "retry_storage",
    "warm_with_retry",
]
