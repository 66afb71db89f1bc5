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
Helper code for the tests

Created on Mar 15, 2013

@author: Aaron Digulla <digulla@hepe.com>
'''

import os
import difflib
import zipfile

def toLines(s):
    return ['%s\n' % line for line in s.split('\n')]

def compareStrings(expectedData, actualData):
    expectedData = toLines(expectedData)
    actualData = toLines(actualData)

    diff = difflib.unified_diff(expectedData, actualData, 'expected', 'actual', n=3)

    diff = ''.join(diff)
    print(diff)
    assert '' == diff

def writeFile(path, content):
    dir = os.path.dirname(str(path))
    if not os.path.exists(dir):
        os.makedirs(dir)

    mode = 'wb' if isinstance(content, bytes) else 'w'
    with open(str(path), mode) as fh:
        fh.write(content)

    return str(path)

def makeManifest(**attrs):
    '''Manifest text; underscores in names become dashes'''
    lines = ['Manifest-Version: 1.0']
    for name, value in attrs.items():
        lines.append('%s: %s' % (name.replace('_', '-'), value))
    return '\r\n'.join(lines) + '\r\n\r\n'

def makeJar(path, entries, manifest=None):
    '''Create a JAR with the given {name: content} entries'''
    dir = os.path.dirname(str(path))
    if not os.path.exists(dir):
        os.makedirs(dir)

    with zipfile.ZipFile(str(path), 'w', compression=zipfile.ZIP_DEFLATED) as zf:
        if manifest is not None:
            zf.writestr('META-INF/MANIFEST.MF', manifest)

        for name, content in entries.items():
            zf.writestr(name, content)

    return str(path)

def readJar(path):
    with zipfile.ZipFile(str(path)) as zf:
        return dict((info.filename, zf.read(info)) for info in zf.infolist())
