"""Transaction fee checks against global fees and local minimum gas prices."""