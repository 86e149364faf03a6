# e2e/smoke/selectors/app_selectors.py

# login
LOGIN_EMAIL_INPUT = 'input[name="email"]'
LOGIN_PASSWORD_INPUT = 'input[name="password"]'
LOGIN_SUBMIT_BUTTON = 'button[type="submit"]'

# sidebar
SIDEBAR_TOGGLE = '[data-cy="button-sidebar-toggle"]'
SIDEBAR_MODULE_BUTTON = '[data-cy="button-sidebar-{name}"]'


def sidebar_module_button(name: str) -> str:
    return SIDEBAR_MODULE_BUTTON.format(name=name)
