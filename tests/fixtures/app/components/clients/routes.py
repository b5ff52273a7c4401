ROUTES = ["/clients"]
