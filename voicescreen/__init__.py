"""
VoiceScreen - Timed Voice Interview Simulator

Runs a timed, voice-interactive mock job interview: AI-generated questions
read aloud, transcribed spoken answers, and a final scored transcript.
"""

__version__ = "0.1.0"
__author__ = "VoiceScreen Team"
