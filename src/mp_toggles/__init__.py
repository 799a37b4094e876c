"""
mp_toggles – membership-based feature toggles.

Import path convention::

    from mp_toggles.application.feature_toggles import FeatureToggleService
    from mp_toggles.adapters.redis import RedisToggleStore
    from mp_toggles.kernel.security import Principal
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
