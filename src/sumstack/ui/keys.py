# Key symbols as reported by arcade/pyglet.
KEY_SPACE = 32
KEY_1 = 49
KEY_2 = 50
KEY_C = 99
KEY_P = 112
KEY_R = 114
KEY_T = 116
KEY_ENTER = 65293
KEY_ESCAPE = 65307
KEY_NUM_1 = 65457
KEY_NUM_2 = 65458

MOUSE_BUTTON_LEFT = 1
