# /*******************************************************************************
# * Copyright (c) 15.03.2013 Aaron Digulla.
# * All rights reserved. This program and the accompanying materials
# * are made available under the terms of the Eclipse Public License v1.0
# * which accompanies this distribution, and is available at
# * http://www.eclipse.org/legal/epl-v10.html
# *
# * Contributors:
# *    Aaron Digulla - initial API and implementation and/or initial documentation
# *******************************************************************************/
'''
Read and write JAR manifests (META-INF/MANIFEST.MF)

Attribute names are case insensitive. Lines are limited to 72 bytes;
longer values continue on the next line which starts with a single space.

Created on Mar 15, 2013

@author: Aaron Digulla <digulla@hepe.com>
'''

MANIFEST_NAME = 'META-INF/MANIFEST.MF'
MANIFEST_VERSION = 'Manifest-Version'
MAX_LINE_LENGTH = 72

class Manifest(object):
    '''The main attributes of a manifest plus the per-entry sections'''
    def __init__(self, mainAttributes=None, sections=None):
        self.mainAttributes = dict(mainAttributes or {})
        self.sections = list(sections or [])

    def get(self, name, default=None):
        return getAttribute(self.mainAttributes, name, default)

    def __repr__(self):
        return 'Manifest(%s)' % ', '.join('%s=%s' % item for item in self.mainAttributes.items())

def getAttribute(attributes, name, default=None):
    '''Case insensitive lookup'''
    key = name.lower()
    for k, v in attributes.items():
        if k.lower() == key:
            return v
    return default

def overlay(base, override):
    '''Merge two attribute maps. The values in override win.

    Existing keys keep their position; the spelling of the name
    is taken from override.'''
    names = dict((k.lower(), k) for k in override)

    result = {}
    for k, v in base.items():
        name = names.pop(k.lower(), None)
        if name is None:
            result[k] = v
        else:
            result[name] = override[name]

    for name in names.values():
        result[name] = override[name]

    return result

def joinContinuationLines(text):
    lines = []
    for line in text.splitlines():
        if line.startswith(' ') and lines:
            lines[-1] += line[1:]
        else:
            lines.append(line)
    return lines

def parseManifest(data):
    '''Parse the bytes of a manifest file'''
    if isinstance(data, bytes):
        data = data.decode('UTF-8', errors='replace')

    sections = [{}]
    for line in joinContinuationLines(data):
        if not line.strip():
            if sections[-1]:
                sections.append({})
            continue

        pos = line.find(':')
        if pos <= 0:
            raise ValueError('Invalid manifest line: %r' % line)

        name = line[:pos].strip()
        value = line[pos+1:]
        if value.startswith(' '):
            value = value[1:]

        sections[-1][name] = value

    if len(sections) > 1 and not sections[-1]:
        sections.pop()

    return Manifest(sections[0], sections[1:])

def wrapLine(line):
    '''Split one header line into 72 byte chunks without breaking UTF-8 sequences'''
    chunks = []
    current = b''
    limit = MAX_LINE_LENGTH
    for ch in line:
        encoded = ch.encode('UTF-8')
        if len(current) + len(encoded) > limit:
            chunks.append(current)
            current = b''
            # Continuation lines start with a space
            limit = MAX_LINE_LENGTH - 1

        current += encoded

    chunks.append(current)
    return b'\r\n '.join(chunks) + b'\r\n'

def formatAttributes(attributes):
    return b''.join(wrapLine('%s: %s' % item) for item in attributes.items())

def formatManifest(manifest):
    '''Convert a manifest into bytes. Manifest-Version is always the first line.'''
    main = dict(manifest.mainAttributes)
    version = getAttribute(main, MANIFEST_VERSION, '1.0')
    main = dict((k, v) for k, v in main.items() if k.lower() != MANIFEST_VERSION.lower())

    data = wrapLine('%s: %s' % (MANIFEST_VERSION, version))
    data += formatAttributes(main)
    data += b'\r\n'

    for section in manifest.sections:
        data += formatAttributes(section)
        data += b'\r\n'

    return data
