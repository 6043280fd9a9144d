from typing import Dict, Optional, Union

from app.features.platform_detection.schemas.platform import (
    CapabilityVector,
    CodeAccessLevel,
    Platform,
    PlatformActionProfile,
)

# Unknown platforms assume raw code access and no automation.
DEFAULT_CAPABILITIES = CapabilityVector(
    has_api=False,
    can_auto_fix=False,
    requires_plugin=False,
    has_visual_editor=False,
    code_access_level=CodeAccessLevel.full,
)

CAPABILITY_TABLE: Dict[Platform, CapabilityVector] = {
    Platform.webflow: CapabilityVector(
        has_api=True,
        can_auto_fix=True,
        requires_plugin=False,
        has_visual_editor=True,
        code_access_level=CodeAccessLevel.limited,
    ),
    Platform.wordpress: CapabilityVector(
        has_api=True,
        can_auto_fix=True,
        requires_plugin=True,
        has_visual_editor=True,
        code_access_level=CodeAccessLevel.full,
    ),
    Platform.framer: CapabilityVector(
        has_api=False,
        can_auto_fix=False,
        requires_plugin=False,
        has_visual_editor=True,
        code_access_level=CodeAccessLevel.none,
    ),
    Platform.nextjs: DEFAULT_CAPABILITIES,
    Platform.react: DEFAULT_CAPABILITIES,
    Platform.vue: DEFAULT_CAPABILITIES,
}

ACTION_PROFILES: Dict[Platform, PlatformActionProfile] = {
    Platform.webflow: PlatformActionProfile(
        can_create_pr=False,
        can_email_designer=True,
        can_generate_code=False,
        can_deep_link=True,
        recommended_approach="visual_editor",
    ),
    Platform.wordpress: PlatformActionProfile(
        can_create_pr=True,
        can_email_designer=True,
        can_generate_code=True,
        can_deep_link=False,
        recommended_approach="plugin_or_code",
    ),
    Platform.framer: PlatformActionProfile(
        can_create_pr=False,
        can_email_designer=True,
        can_generate_code=True,
        can_deep_link=False,
        recommended_approach="code_override",
    ),
    Platform.react: PlatformActionProfile(
        can_create_pr=True,
        can_email_designer=False,
        can_generate_code=True,
        can_deep_link=False,
        recommended_approach="pull_request",
    ),
    Platform.nextjs: PlatformActionProfile(
        can_create_pr=True,
        can_email_designer=False,
        can_generate_code=True,
        can_deep_link=False,
        recommended_approach="pull_request",
    ),
    Platform.vue: PlatformActionProfile(
        can_create_pr=True,
        can_email_designer=False,
        can_generate_code=True,
        can_deep_link=False,
        recommended_approach="pull_request",
    ),
    Platform.custom: PlatformActionProfile(
        can_create_pr=True,
        can_email_designer=True,
        can_generate_code=True,
        can_deep_link=False,
        recommended_approach="manual",
    ),
}


def _as_platform(platform: Union[Platform, str, None]) -> Optional[Platform]:
    if isinstance(platform, Platform):
        return platform
    try:
        return Platform(str(platform).strip().lower())
    except ValueError:
        return None


def get_capabilities(platform: Union[Platform, str, None]) -> CapabilityVector:
    """Static capability lookup. Anything unrecognised gets the default vector."""
    resolved = _as_platform(platform)
    if resolved is None:
        return DEFAULT_CAPABILITIES
    return CAPABILITY_TABLE.get(resolved, DEFAULT_CAPABILITIES)


def get_platform_actions(platform: Union[Platform, str, None]) -> PlatformActionProfile:
    """Which remediation channels make sense for a platform (PRs, designer email, ...)."""
    resolved = _as_platform(platform)
    if resolved is None:
        return ACTION_PROFILES[Platform.custom]
    return ACTION_PROFILES.get(resolved, ACTION_PROFILES[Platform.custom])
