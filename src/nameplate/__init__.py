""" Nameplate: conditional display expressions for player labels

Labels shown above players (or anywhere else player facing) can be made
conditional on expressions like "%player_level% > 10 && %vault_eco_balance% >= 1.000".
Conditions are authored in config by people using their own locale's number
formatting, evaluated per player, many times per second, from many threads.

 * literals: normalizes locale specific number literals
 * engine: the expression engine black box, backed by simpleeval
 * pool: bounded pool of engines, which aren't thread-safe
 * cache: short lived cache of results keyed by normalized expression
 * conditions: ties it all together, ConditionEvaluator.evaluate
 * placeholders: seam to the host's placeholder system
 * commands: player name arguments and tab completion
"""
