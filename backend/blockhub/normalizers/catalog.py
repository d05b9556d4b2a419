def normalize_environment(env):
    return {
        "key": env.key,
        "label": env.label,
        "description": env.description,
        "color": env.color,
        "order": env.order,
        "requiresApproval": env.requires_approval,
    }


def normalize_region(region):
    return {
        "key": region.key,
        "label": region.label,
        "flag": region.flag,
        "description": region.description,
    }
