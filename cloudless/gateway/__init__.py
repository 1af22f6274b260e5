"""Route matching, routing and API gateway proxy event conversion."""