"""Grids shared by the test modules."""


SCENARIO_OVERRIDES = """5 6
######
#@E $#
# N  #
#X   #
######
"""

SCENARIO_OVERRIDE_TOUR = """10 10
##########
#        #
#  S   W #
#        #
#  $     #
#        #
#@       #
#        #
#E     N #
##########
"""

SCENARIO_BREAKER = """10 10
##########
# @      #
# B      #
#XXX     #
# B      #
#    BXX$#
#XXXXXXXX#
#        #
#        #
##########
"""

# row 3 is one character too long and must be truncated
SCENARIO_INVERTER = """10 10
##########
#    I   #
#        #
#       $# 
#       @#
#        #
#       I#
#        #
#        #
##########
"""

SCENARIO_TELEPORTER = """10 10
##########
#    1   #
#        #
#        #
#        #
#@       #
#        #
#        #
#    1  $#
##########
"""

SCENARIO_BOX = """5 5
#####
#   #
# $ #
# @ #
#####
"""


