"""
Platform Detection Services

1. detectors.py - EvidenceRule / PlatformDetector and the predicate builders
2. registry.py - the registered detectors, in tie-break order, plus guide thresholds
3. classifier.py - runs every detector and picks the winner (never raises)
4. capabilities.py - static capability and action tables per platform
5. detection_store.py - write-once cache of the winning detection per scan
6. signal_collector.py - headless Chrome loader that produces PageSignals
"""
