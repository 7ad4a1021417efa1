"""
The program you get when you don't bring one: a little meander
driven by the digits of each number in a list.
"""

DEFAULT_PROGRAM = """d
90 l
[ . 0 i 1 - 45 * r 1 i 20 * 50 + f ] F :
[ 5 3 3 12 13 2 12 ] I :
I F e
0 F !
I F e"""

DEFAULT_WIDTH = 500
DEFAULT_HEIGHT = 500
