# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from .user import User
from .checkin import CheckIn
from .todo import Todo, GoalImport
from .journal import JournalEntry
from .cbt import ThoughtRecord, BehaviouralExperiment
