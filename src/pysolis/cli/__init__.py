"""Command line tools for pysolis.

- bridge: one poll pass from the inverter to MQTT (``pysolis-bridge``)
- register_dump: raw register scan for maintenance (``pysolis-register-dump``)
"""
