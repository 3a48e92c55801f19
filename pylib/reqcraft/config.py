'''Configuration for default transports, read from env.'''

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

TRUTHY = {'1', 'true', 'yes', 'on'}


@dataclass
class RequestConfig:
    '''Settings used when callers do not inject their own transport.'''

    timeout: float = 30.0
    follow_redirects: bool = True

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> RequestConfig:
        '''
        Build config from REQCRAFT_* env vars. Explicit overrides win.
        Invalid timeout values fall back to the default.
        '''
        env = os.environ if environ is None else environ
        try:
            timeout = float(env.get('REQCRAFT_TIMEOUT', '30'))
        except ValueError:
            timeout = 30.0
        redirects_raw = env.get('REQCRAFT_FOLLOW_REDIRECTS')
        follow_redirects = True if redirects_raw is None else redirects_raw.strip().lower() in TRUTHY
        cfg = cls(timeout=timeout, follow_redirects=follow_redirects)
        for key, value in overrides.items():
            if not hasattr(cfg, key):
                raise ValueError(f'Unknown config option: {key}')
            if value is not None:
                setattr(cfg, key, value)
        return cfg
