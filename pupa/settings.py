from envelop import Environment


env = Environment()

LOGLEVEL = env.get('LOGLEVEL', 'WARN').upper()

IGNORE_HTTPS_ERRORS = env.get_bool('IGNORE_HTTPS_ERRORS', False)

DEFAULT_VIEWPORT = {
    'width': env.get_int('DEFAULT_VIEWPORT_WIDTH', 800),
    'height': env.get_int('DEFAULT_VIEWPORT_HEIGHT', 600),
}

# Seconds to wait in Browser.wait_for_target before giving up
TARGET_TIMEOUT = env.get_int('TARGET_TIMEOUT', 30)
