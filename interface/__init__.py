"""Terminal and HTTP front ends for the stage engine."""
