# API version 1
