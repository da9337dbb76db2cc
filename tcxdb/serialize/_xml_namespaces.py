# XML namespaces found in TCX files. Elements are matched on their local names, so documents that use other (or no)
# namespaces are still accepted.

TCX_NAMESPACES = {
    None: 'http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2',
    'activity_extension': 'http://www.garmin.com/xmlschemas/ActivityExtension/v2',
}
