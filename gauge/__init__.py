"""
PwGauge Gauge -- Password Strength & Breach Exposure
=====================================================

Scores a candidate password, estimates how long it would take to crack
under several attacker profiles, suggests improvements and checks the
password against a public breach corpus without disclosing it.

Modules:
    - gauge.core.engine: Central analysis orchestrator
    - gauge.core.models: Pydantic data models
    - gauge.analyzers: Pattern matcher adapter, entropy estimator,
      suggestion synthesizer and breach checker
    - gauge.output: Console and report output
    - gauge.cli: Click-based command-line interface

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
    - Wheeler, D. L. (2016). zxcvbn: Low-Budget Password Strength
      Estimation. USENIX Security.
"""

__version__ = "1.0.0"
__tool_name__ = "gauge"
