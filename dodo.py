def task_lsystem():
    """Grow a plant preset and show it in rerun"""
    return {
        'actions': ['python examples/lsystem.py %(preset)s --season %(season)s'],
        'params': [
            {'name': 'preset', 'long': 'preset', 'default': 'bush'},
            {'name': 'season', 'long': 'season', 'default': 'summer'},
        ],
        'verbosity': 2,
    }

def task_test():
    """Run the test suite"""
    return {
        'actions': ['python -m pytest tests'],
        'verbosity': 2,
    }
