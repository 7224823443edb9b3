"""campuscalm: empathetic companion back end for university students.

Every message is classified locally (sentiment + urgency) before a prompt
is sent to the generative service, and crisis resources are always
injected on the urgent path regardless of what the model returns.
"""

__version__ = "0.1.0"
