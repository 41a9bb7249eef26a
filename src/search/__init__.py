"""Search query interpretation and region classification.

The search layer converts free text typed into the map search box into a strict `ParsedQuery`
(structured filters, residual search terms and an optional place reference) and maps reverse-geocoded
state names onto the fixed region taxonomy.
"""
