"""
singleflight – single-flight retry controller for asyncio.

Import path convention::

    from singleflight import RetryController
    from singleflight.kernel.errors import RetryLimitError
    from singleflight.resilience.retry import ConstantBackoff, RetryConfig
"""

from singleflight.resilience.retry import RetryConfig, RetryConfigBuilder, RetryController, RetryTuning

__version__ = "0.1.0"
__all__ = ["RetryConfig", "RetryConfigBuilder", "RetryController", "RetryTuning", "__version__"]
